"""
Ring layout for partners around a facility.

Partners are spread on a circle of a count-dependent radius (in degrees)
centred on the facility. Slot i sits at angle 2*pi*i/count - pi/2, so slots are
equally spaced. Longitude offsets are stretched by 1/cos(lat), up to a cap.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, List, Tuple

from peerglobe.geo.point import GeoPoint

if TYPE_CHECKING:
    from peerglobe.config.settings import RingLayoutConfig, RingTier


def _clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))


def _select_tier(count: int, config: "RingLayoutConfig") -> "RingTier":
    for tier in config.tiers:
        if tier.contains(count):
            return tier
    # Below the first tier (a single partner) or in a gap between custom tiers.
    below = [t for t in config.tiers if t.min_count <= count]
    return below[-1] if below else config.tiers[0]


def ring_radius(count: int, config: "RingLayoutConfig") -> float:
    """Ring radius in degrees for ``count`` partners."""
    if config.radius_policy == "fixed":
        return config.fixed_radius

    tier = _select_tier(count, config)
    hi = tier.max_count
    if hi is None:
        hi = max(config.large_tier_saturation, tier.min_count)
    if hi == tier.min_count:
        t = 0.0
    else:
        t = _clamp((count - tier.min_count) / (hi - tier.min_count), 0.0, 1.0)
    return tier.min_radius + (tier.max_radius - tier.min_radius) * t


def _wrap_lng(lng: float) -> float:
    if lng > 180.0:
        return lng - 360.0
    if lng < -180.0:
        return lng + 360.0
    return lng


def longitude_correction(center_lat: float, config: "RingLayoutConfig") -> float:
    cos_lat = math.cos(math.radians(center_lat))
    if cos_lat > config.lng_correction_min_cos:
        correction = 1.0 / cos_lat
    else:
        correction = config.lng_correction_near_pole
    return min(correction, config.lng_correction_cap)


def ring_positions(
    center: GeoPoint, count: int, config: "RingLayoutConfig"
) -> List[Tuple[float, GeoPoint]]:
    """(angle, point) for each of ``count`` equally spaced ring slots."""
    if count <= 0:
        return []

    radius = ring_radius(count, config)
    lng_corr = longitude_correction(center.lat, config)
    max_lat = config.max_latitude_offset

    positions: List[Tuple[float, GeoPoint]] = []
    for i in range(count):
        # slot 0 has sin = -1, so it sits due south of the facility
        angle = 2 * math.pi * i / count - math.pi / 2
        lat_offset = radius * math.sin(angle)
        lng_offset = radius * math.cos(angle) * lng_corr
        point = GeoPoint(
            lat=_clamp(center.lat + lat_offset, -max_lat, max_lat),
            lng=_wrap_lng(center.lng + lng_offset),
        )
        positions.append((angle, point))
    return positions
