from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

import numpy as np

from peerglobe.geo.distance import haversine_km
from peerglobe.geo.point import GeoPoint
from peerglobe.topology.partners import is_self_name

if TYPE_CHECKING:
    from peerglobe.config.settings import ArcWeightConfig


@dataclass(frozen=True)
class ArcWeights:
    altitude: float
    stroke: float


class ArcPropertyInterpolator:
    """
    Map an arc length to its altitude and stroke.

    Distances inside [min_distance_km, max_distance_km] blend linearly from the
    short preset to the long preset; outside the window the nearest preset is
    used as is.
    """

    def __init__(self, config: "ArcWeightConfig") -> None:
        self.config = config

    def position(self, distance_km: float) -> float:
        cfg = self.config
        t = (distance_km - cfg.min_distance_km) / (
            cfg.max_distance_km - cfg.min_distance_km
        )
        return float(np.clip(t, 0.0, 1.0))

    def weights(self, distance_km: float) -> ArcWeights:
        cfg = self.config
        t = self.position(distance_km)
        return ArcWeights(
            altitude=cfg.short_altitude * (1 - t) + cfg.long_altitude * t,
            stroke=cfg.short_stroke * (1 - t) + cfg.long_stroke * t,
        )


class ArcFilter:
    """Rejects arcs to the operator itself and arcs shorter than the minimum length."""

    def __init__(self, self_name: str, min_arc_distance_km: float) -> None:
        self.self_name = self_name
        self.min_arc_distance_km = min_arc_distance_km

    def keep(
        self,
        partner_name: str,
        facility_point: GeoPoint,
        partner_point: GeoPoint,
        distance_km: Optional[float] = None,
    ) -> bool:
        if is_self_name(partner_name, self.self_name):
            return False
        if distance_km is None:
            distance_km = haversine_km(facility_point, partner_point)
        if math.isnan(distance_km):
            return False
        return distance_km >= self.min_arc_distance_km
