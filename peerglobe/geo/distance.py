import math
from typing import Sequence

import numpy as np

from peerglobe.config.constants import EARTH_RADIUS_KM
from peerglobe.geo.point import GeoPoint


def haversine_km(a: GeoPoint, b: GeoPoint, radius_km: float = EARTH_RADIUS_KM) -> float:
    """Great-circle distance between two points in kilometres."""
    d_lat = math.radians(b.lat - a.lat)
    d_lng = math.radians(b.lng - a.lng)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.lat))
        * math.cos(math.radians(b.lat))
        * math.sin(d_lng / 2) ** 2
    )
    h = min(1.0, h)
    return 2 * radius_km * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def haversine_km_many(
    origin: GeoPoint,
    points: Sequence[GeoPoint],
    radius_km: float = EARTH_RADIUS_KM,
) -> np.ndarray:
    """Distances from ``origin`` to each of ``points``, in input order."""
    if not points:
        return np.empty(0, dtype=float)
    lats = np.radians(np.array([p.lat for p in points], dtype=float))
    lngs = np.radians(np.array([p.lng for p in points], dtype=float))
    lat0 = math.radians(origin.lat)
    lng0 = math.radians(origin.lng)

    h = (
        np.sin((lats - lat0) / 2) ** 2
        + math.cos(lat0) * np.cos(lats) * np.sin((lngs - lng0) / 2) ** 2
    )
    # rounding can push h a hair above 1 for antipodal points
    h = np.clip(h, 0.0, 1.0)
    return 2 * radius_km * np.arctan2(np.sqrt(h), np.sqrt(1 - h))
