from .point import GeoPoint
from .regions import RegionTag, BACKBONE_REGIONS, classify, group_by_region
from .distance import haversine_km, haversine_km_many
from .layout import ring_positions, ring_radius, longitude_correction

__all__ = [
    "GeoPoint",
    "RegionTag",
    "BACKBONE_REGIONS",
    "classify",
    "group_by_region",
    "haversine_km",
    "haversine_km_many",
    "ring_positions",
    "ring_radius",
    "longitude_correction",
]
