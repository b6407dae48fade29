from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from peerglobe.geo.point import GeoPoint
from peerglobe.geo.regions import RegionTag


class FacilityRole(Enum):
    REFERENCE = "reference"  # shown on the globe, no network participation
    POP = "pop"


class NodeCategory(Enum):
    REFERENCE = "reference"
    POP = "pop"
    PARTNER = "partner"


@dataclass(frozen=True)
class FacilityNode:
    name: str
    point: GeoPoint
    region: RegionTag
    role: FacilityRole
    partner_count: int = 0
    declared_region: Optional[str] = None

    @property
    def lat(self) -> float:
        return self.point.lat

    @property
    def lng(self) -> float:
        return self.point.lng

    @property
    def is_pop(self) -> bool:
        return self.role is FacilityRole.POP

    def __str__(self) -> str:
        return f"{self.name} ({self.role.value}, {self.region.value}, {self.partner_count})"


@dataclass(frozen=True)
class PartnerRecord:
    """A partner as it arrives in the input; ``declared_point`` is advisory only."""

    name: str
    facility: FacilityNode
    declared_point: Optional[GeoPoint] = None


@dataclass(frozen=True)
class PositionedPartner:
    name: str
    point: GeoPoint
    facility: FacilityNode
    angle: float

    @property
    def lat(self) -> float:
        return self.point.lat

    @property
    def lng(self) -> float:
        return self.point.lng

    def __str__(self) -> str:
        return f"{self.name} @ {self.point} (via {self.facility.name})"
