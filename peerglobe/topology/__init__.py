from .partners import normalize_partners, is_self_name
from .ring import layout_ring
from .arcs import ArcFilter, ArcPropertyInterpolator, ArcWeights
from .hubs import resolve_hub, resolve_hubs
from .backbone import BACKBONE_PAIRS, build_backbone
from .assembler import TopologyAssembler, assemble_topology

__all__ = [
    "normalize_partners",
    "is_self_name",
    "layout_ring",
    "ArcFilter",
    "ArcPropertyInterpolator",
    "ArcWeights",
    "resolve_hub",
    "resolve_hubs",
    "BACKBONE_PAIRS",
    "build_backbone",
    "TopologyAssembler",
    "assemble_topology",
]
