"""
Flat, renderer-facing records.

The globe reads these through plain field access (lat, lng, text, category);
the style fields are copied from ``RenderPresets`` so the renderer needs no
constants of its own.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from peerglobe.config.settings import RenderPresets
from peerglobe.graph.edge import BackboneEdge, EdgeKind, LocalArc
from peerglobe.graph.node import (
    FacilityNode,
    FacilityRole,
    NodeCategory,
    PositionedPartner,
)


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, tuple):
        return list(value)
    return value


def _record_dict(record) -> Dict[str, Any]:
    return {k: _plain(v) for k, v in asdict(record).items()}


@dataclass(frozen=True)
class RenderNode:
    lat: float
    lng: float
    text: str
    category: NodeCategory
    region: Optional[str] = None
    facility: Optional[str] = None
    is_hub: bool = False
    color: Optional[str] = None
    altitude: Optional[float] = None
    radius: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return _record_dict(self)


@dataclass(frozen=True)
class RenderLabel:
    lat: float
    lng: float
    text: str
    category: NodeCategory
    color: str
    size: float
    altitude: float

    def to_dict(self) -> Dict[str, Any]:
        return _record_dict(self)


@dataclass(frozen=True)
class RenderEdge:
    start_lat: float
    start_lng: float
    end_lat: float
    end_lng: float
    kind: EdgeKind
    source: str
    target: str
    distance_km: float
    altitude: float
    stroke: float
    colors: Tuple[str, ...]
    dash_length: float
    dash_gap: float
    dash_animate_ms: int
    from_region: Optional[str] = None
    to_region: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _record_dict(self)


def facility_render_node(
    facility: FacilityNode, presets: RenderPresets, is_hub: bool
) -> RenderNode:
    if facility.role is FacilityRole.REFERENCE:
        return RenderNode(
            lat=facility.lat,
            lng=facility.lng,
            text=facility.name,
            category=NodeCategory.REFERENCE,
            region=facility.region.value,
            color=presets.reference_pin_color,
            altitude=presets.reference_pin_altitude,
            radius=presets.reference_pin_radius,
        )
    return RenderNode(
        lat=facility.lat,
        lng=facility.lng,
        text=facility.name,
        category=NodeCategory.POP,
        region=facility.region.value,
        is_hub=is_hub,
        color=presets.pop_pin_color,
        altitude=presets.pop_pin_altitude,
        radius=presets.pop_pin_radius,
    )


def partner_render_node(partner: PositionedPartner) -> RenderNode:
    # Partners are drawn as labels only; no pin style.
    return RenderNode(
        lat=partner.lat,
        lng=partner.lng,
        text=partner.name,
        category=NodeCategory.PARTNER,
        region=partner.facility.region.value,
        facility=partner.facility.name,
    )


def reference_label(facility: FacilityNode, presets: RenderPresets) -> RenderLabel:
    return RenderLabel(
        lat=facility.lat,
        lng=facility.lng,
        text=facility.name,
        category=NodeCategory.REFERENCE,
        color=presets.reference_label_color,
        size=presets.reference_label_size,
        altitude=presets.reference_label_altitude,
    )


def partner_label(partner: PositionedPartner, presets: RenderPresets) -> RenderLabel:
    return RenderLabel(
        lat=partner.lat,
        lng=partner.lng,
        text=partner.name,
        category=NodeCategory.PARTNER,
        color=presets.partner_label_color,
        size=presets.partner_label_size,
        altitude=presets.partner_label_altitude,
    )


def local_render_edge(arc: LocalArc, presets: RenderPresets) -> RenderEdge:
    return RenderEdge(
        start_lat=arc.facility.lat,
        start_lng=arc.facility.lng,
        end_lat=arc.partner.lat,
        end_lng=arc.partner.lng,
        kind=EdgeKind.LOCAL,
        source=arc.facility.name,
        target=arc.partner.name,
        distance_km=arc.distance_km,
        altitude=arc.altitude,
        stroke=arc.stroke,
        colors=presets.local_arc_colors,
        dash_length=presets.local_arc_dash_length,
        dash_gap=presets.local_arc_dash_gap,
        dash_animate_ms=presets.local_arc_dash_animate_ms,
    )


def backbone_render_edge(edge: BackboneEdge, presets: RenderPresets) -> RenderEdge:
    return RenderEdge(
        start_lat=edge.from_hub.lat,
        start_lng=edge.from_hub.lng,
        end_lat=edge.to_hub.lat,
        end_lng=edge.to_hub.lng,
        kind=EdgeKind.BACKBONE,
        source=edge.from_hub.name,
        target=edge.to_hub.name,
        distance_km=edge.distance_km,
        altitude=presets.backbone_arc_altitude,
        stroke=presets.backbone_arc_stroke,
        colors=presets.backbone_arc_colors,
        dash_length=presets.backbone_arc_dash_length,
        dash_gap=presets.backbone_arc_dash_gap,
        dash_animate_ms=presets.backbone_arc_dash_animate_ms,
        from_region=edge.from_region.value,
        to_region=edge.to_region.value,
    )
