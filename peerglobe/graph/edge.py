from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from peerglobe.geo.regions import RegionTag
from peerglobe.graph.node import FacilityNode, PositionedPartner


class EdgeKind(Enum):
    LOCAL = "local"  # POP -> partner fan-out
    BACKBONE = "backbone"  # hub -> hub


@dataclass(frozen=True)
class LocalArc:
    facility: FacilityNode
    partner: PositionedPartner
    distance_km: float
    altitude: float
    stroke: float

    def __str__(self) -> str:
        return (
            f"{self.facility.name} --local ({self.distance_km:.1f} km)--> "
            f"{self.partner.name}"
        )


@dataclass(frozen=True)
class BackboneEdge:
    from_region: RegionTag
    to_region: RegionTag
    from_hub: FacilityNode
    to_hub: FacilityNode
    distance_km: float

    def key(self) -> str:
        return f"{self.from_region.value}->{self.to_region.value}"

    def __str__(self) -> str:
        return (
            f"{self.from_hub.name} ({self.from_region.value}) --backbone--> "
            f"{self.to_hub.name} ({self.to_region.value})"
        )
