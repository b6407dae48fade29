from typing import Dict, Tuple

# Partner name of the network operator itself; never drawn as its own partner.
SELF_PARTNER_NAME = "tencent"

# Arcs shorter than this are considered degenerate (partner co-located with POP).
MIN_ARC_DISTANCE_KM = 15.0

EARTH_RADIUS_KM = 6371.0


# ==========================================
# RING LAYOUT
# ==========================================

# "tiered" interpolates the radius inside RING_RADIUS_TIERS, "fixed" always
# uses FIXED_RING_RADIUS.
RING_RADIUS_POLICY = "tiered"
FIXED_RING_RADIUS = 1.2

# (min_count, max_count, min_radius_deg, max_radius_deg); max_count None = open
RING_RADIUS_TIERS: Tuple[Tuple[int, object, float, float], ...] = (
    (2, 4, 0.6, 0.9),
    (5, 8, 1.0, 1.4),
    (9, None, 1.6, 2.2),
)
# Partner count at which the open-ended tier reaches its max radius.
LARGE_TIER_SATURATION = 16

MAX_LATITUDE_OFFSET = 85.0

# Longitude stretch is 1/cos(lat), capped. Revisions of the globe used 3.0 and 5.0.
LNG_CORRECTION_CAP = 3.0
LNG_CORRECTION_MIN_COS = 0.1
LNG_CORRECTION_NEAR_POLE = 10.0


# ==========================================
# ARC WEIGHTS
# ==========================================

ARC_MIN_DISTANCE_KM = 50.0
ARC_MAX_DISTANCE_KM = 500.0
SHORT_ARC_ALTITUDE = 0.05
LONG_ARC_ALTITUDE = 0.02
SHORT_ARC_STROKE = 0.6
LONG_ARC_STROKE = 0.3


# ==========================================
# HUBS
# ==========================================

HUB_CITIES: Dict[str, Dict[str, object]] = {
    "APAC": {"name": "Singapore", "lat": 1.3521, "lng": 103.8198},
    "EMEA": {"name": "Frankfurt", "lat": 50.1109, "lng": 8.6821},
    "NA": {"name": "Los Angeles", "lat": 34.0522, "lng": -118.2437},
    "LATAM": {"name": "Sao Paulo", "lat": -23.5558, "lng": -46.6396},
}


# ==========================================
# RENDER PRESETS (consumed by the globe, passed through untouched)
# ==========================================

REFERENCE_PIN_COLOR = "#ff4646"
REFERENCE_PIN_ALTITUDE = 0.02
REFERENCE_PIN_RADIUS = 1.0
REFERENCE_LABEL_COLOR = "#ffffff"
REFERENCE_LABEL_SIZE = 1.0
REFERENCE_LABEL_ALTITUDE = 0.03

POP_PIN_COLOR = "#3458b0"
POP_PIN_ALTITUDE = 0.015
POP_PIN_RADIUS = 0.7

PARTNER_LABEL_COLOR = "rgba(255, 255, 255, 0.7)"
PARTNER_LABEL_SIZE = 0.5
PARTNER_LABEL_ALTITUDE = 0.01

LOCAL_ARC_COLORS = ("#3458b0", "#64b5f6")
LOCAL_ARC_DASH_LENGTH = 0.3
LOCAL_ARC_DASH_GAP = 0.15
LOCAL_ARC_DASH_ANIMATE_MS = 2000

BACKBONE_ARC_COLORS = ("#3458b0", "#1a237e")
BACKBONE_ARC_ALTITUDE = 0.25
BACKBONE_ARC_STROKE = 0.4
BACKBONE_ARC_DASH_LENGTH = 0.5
BACKBONE_ARC_DASH_GAP = 0.3
BACKBONE_ARC_DASH_ANIMATE_MS = 4000
