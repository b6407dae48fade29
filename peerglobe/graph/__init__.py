from .node import (
    FacilityNode,
    FacilityRole,
    NodeCategory,
    PartnerRecord,
    PositionedPartner,
)
from .edge import BackboneEdge, EdgeKind, LocalArc
from .render import RenderEdge, RenderLabel, RenderNode
from .snapshot import HubAssignment, TopologySnapshot, make_hub_assignment

__all__ = [
    "FacilityNode",
    "FacilityRole",
    "NodeCategory",
    "PartnerRecord",
    "PositionedPartner",
    "BackboneEdge",
    "EdgeKind",
    "LocalArc",
    "RenderEdge",
    "RenderLabel",
    "RenderNode",
    "HubAssignment",
    "TopologySnapshot",
    "make_hub_assignment",
]
