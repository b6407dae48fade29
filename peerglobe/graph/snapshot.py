"""
TopologySnapshot: the immutable result of one assembly.

A snapshot is never patched. Region filtering and every other derived view
produce new objects and leave the snapshot they came from untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

import networkx as nx

from peerglobe.config.settings import RenderPresets
from peerglobe.geo.regions import BACKBONE_REGIONS, RegionTag, group_by_region
from peerglobe.graph.edge import BackboneEdge, EdgeKind, LocalArc
from peerglobe.graph.node import FacilityNode, FacilityRole, PositionedPartner
from peerglobe.graph.render import (
    RenderEdge,
    RenderLabel,
    RenderNode,
    backbone_render_edge,
    facility_render_node,
    local_render_edge,
    partner_label,
    partner_render_node,
    reference_label,
)

HubAssignment = Mapping[RegionTag, Optional[FacilityNode]]


def make_hub_assignment(
    hubs: Mapping[RegionTag, Optional[FacilityNode]]
) -> HubAssignment:
    """Read-only region -> hub mapping with a key for every backbone region."""
    return MappingProxyType({region: hubs.get(region) for region in BACKBONE_REGIONS})


@dataclass(frozen=True)
class TopologySnapshot:
    facility_nodes: Tuple[FacilityNode, ...]
    positioned_partners: Tuple[PositionedPartner, ...]
    local_arcs: Tuple[LocalArc, ...]
    backbone_edges: Tuple[BackboneEdge, ...]
    hub_assignments: HubAssignment
    render: RenderPresets = field(default_factory=RenderPresets)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def reference_facilities(self) -> List[FacilityNode]:
        return [f for f in self.facility_nodes if f.role is FacilityRole.REFERENCE]

    @property
    def pop_facilities(self) -> List[FacilityNode]:
        return [f for f in self.facility_nodes if f.role is FacilityRole.POP]

    def hubs(self) -> List[FacilityNode]:
        return [h for h in self.hub_assignments.values() if h is not None]

    def is_hub(self, facility: FacilityNode) -> bool:
        return any(h == facility for h in self.hub_assignments.values())

    def facilities_by_region(self) -> Dict[RegionTag, List[FacilityNode]]:
        return group_by_region(self.pop_facilities)

    def partners_of(self, facility: FacilityNode) -> List[PositionedPartner]:
        return [p for p in self.positioned_partners if p.facility == facility]

    def find_facility(self, query: str) -> List[FacilityNode]:
        """Facilities whose name contains ``query`` (case-insensitive)."""
        q = (query or "").strip().lower()
        if not q:
            return []
        return [f for f in self.facility_nodes if q in f.name.lower()]

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    def filter_regions(self, active_regions: Iterable[RegionTag]) -> "TopologySnapshot":
        """New snapshot limited to ``active_regions``.

        Backbone edges survive only when both ends are active; hubs of inactive
        regions become None.
        """
        active = frozenset(RegionTag(r) for r in active_regions)
        hubs = {
            region: (hub if region in active else None)
            for region, hub in self.hub_assignments.items()
        }
        return TopologySnapshot(
            facility_nodes=tuple(f for f in self.facility_nodes if f.region in active),
            positioned_partners=tuple(
                p for p in self.positioned_partners if p.facility.region in active
            ),
            local_arcs=tuple(
                a for a in self.local_arcs if a.facility.region in active
            ),
            backbone_edges=tuple(
                e
                for e in self.backbone_edges
                if e.from_region in active and e.to_region in active
            ),
            hub_assignments=make_hub_assignment(hubs),
            render=self.render,
        )

    def nodes(self) -> List[RenderNode]:
        facilities = [
            facility_render_node(f, self.render, self.is_hub(f))
            for f in self.facility_nodes
        ]
        partners = [partner_render_node(p) for p in self.positioned_partners]
        return facilities + partners

    def labels(self) -> List[RenderLabel]:
        # POPs carry no label on the globe.
        references = [reference_label(f, self.render) for f in self.reference_facilities]
        partners = [partner_label(p, self.render) for p in self.positioned_partners]
        return references + partners

    def edges(self) -> List[RenderEdge]:
        local = [local_render_edge(a, self.render) for a in self.local_arcs]
        backbone = [backbone_render_edge(e, self.render) for e in self.backbone_edges]
        return local + backbone

    def hub_names(self) -> Dict[str, Optional[str]]:
        return {
            region.value: (hub.name if hub is not None else None)
            for region, hub in self.hub_assignments.items()
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [n.to_dict() for n in self.nodes()],
            "labels": [label.to_dict() for label in self.labels()],
            "edges": [e.to_dict() for e in self.edges()],
            "hubs": self.hub_names(),
        }

    def to_networkx(self) -> nx.DiGraph:
        """Directed graph: facilities and partners as nodes, local and backbone arcs as edges.

        Nodes are keyed by position, so identical facility records stay
        separate nodes.
        """
        G = nx.DiGraph()
        first_id: Dict[FacilityNode, str] = {}
        partner_owner: List[str] = []
        cursor = 0
        for i, facility in enumerate(self.facility_nodes):
            node_id = f"facility:{i}"
            first_id.setdefault(facility, node_id)
            G.add_node(
                node_id,
                name=facility.name,
                lat=facility.lat,
                lng=facility.lng,
                region=facility.region.value,
                role=facility.role.value,
                is_hub=self.is_hub(facility),
            )
            # partners follow their facility in snapshot order
            taken = 0
            while (
                taken < facility.partner_count
                and cursor < len(self.positioned_partners)
                and self.positioned_partners[cursor].facility == facility
            ):
                partner_owner.append(node_id)
                cursor += 1
                taken += 1

        for j, partner in enumerate(self.positioned_partners):
            owner = (
                partner_owner[j]
                if j < len(partner_owner)
                else first_id[partner.facility]
            )
            G.add_node(
                f"partner:{j}",
                name=partner.name,
                lat=partner.lat,
                lng=partner.lng,
                region=partner.facility.region.value,
                role="partner",
                facility=owner,
            )

        # local arcs are an ordered subsequence of the positioned partners
        j = 0
        for arc in self.local_arcs:
            while self.positioned_partners[j] != arc.partner:
                j += 1
            partner_id = f"partner:{j}"
            G.add_edge(
                G.nodes[partner_id]["facility"],
                partner_id,
                kind=EdgeKind.LOCAL.value,
                distance_km=arc.distance_km,
                altitude=arc.altitude,
                stroke=arc.stroke,
            )
            j += 1
        for edge in self.backbone_edges:
            G.add_edge(
                first_id[edge.from_hub],
                first_id[edge.to_hub],
                kind=EdgeKind.BACKBONE.value,
                distance_km=edge.distance_km,
                from_region=edge.from_region.value,
                to_region=edge.to_region.value,
            )
        return G

    def __str__(self) -> str:
        return (
            f"TopologySnapshot(facilities={len(self.facility_nodes)}, "
            f"partners={len(self.positioned_partners)}, "
            f"local_arcs={len(self.local_arcs)}, "
            f"backbone_edges={len(self.backbone_edges)}, "
            f"hubs={self.hub_names()})"
        )
