"""
TopologyAssembler: raw records in, one immutable TopologySnapshot out.

Stages:
  1. validate and classify every facility (reference sites, then POPs)
  2. per POP: normalize partners -> ring layout -> arc distance and weights
     -> drop degenerate arcs
  3. group POPs by region -> resolve one hub per region
  4. build the fixed hub-to-hub backbone

The assembler holds only its configuration, so repeated calls with equal input
return equal snapshots and never touch earlier ones.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from peerglobe.config.settings import TopologyConfig
from peerglobe.geo.distance import haversine_km
from peerglobe.geo.point import GeoPoint
from peerglobe.geo.regions import classify, group_by_region
from peerglobe.graph.edge import LocalArc
from peerglobe.graph.node import (
    FacilityNode,
    FacilityRole,
    PartnerRecord,
    PositionedPartner,
)
from peerglobe.graph.snapshot import TopologySnapshot
from peerglobe.pipeline.validation import (
    PartnershipRecord,
    ReferenceRecord,
    validate_partnership_records,
    validate_reference_records,
)
from peerglobe.topology.arcs import ArcFilter, ArcPropertyInterpolator
from peerglobe.topology.backbone import build_backbone
from peerglobe.topology.hubs import resolve_hubs
from peerglobe.topology.partners import normalize_partners
from peerglobe.topology.ring import layout_ring


def reference_facility(record: ReferenceRecord) -> FacilityNode:
    return FacilityNode(
        name=record.city,
        point=GeoPoint(record.lat, record.lng),
        region=classify(record.lat, record.lng),
        role=FacilityRole.REFERENCE,
        partner_count=0,
        declared_region=record.region,
    )


def pop_facility(record: PartnershipRecord, partner_names: Sequence[str]) -> FacilityNode:
    return FacilityNode(
        name=record.city,
        point=GeoPoint(record.lat, record.lng),
        region=classify(record.lat, record.lng),
        role=FacilityRole.POP,
        partner_count=len(partner_names),
    )


def partner_records(
    record: PartnershipRecord, facility: FacilityNode, names: Sequence[str]
) -> List[PartnerRecord]:
    """One record per normalized name, carrying the first declared point seen for it."""
    declared: Dict[str, Optional[GeoPoint]] = {}
    for p in record.partners:
        key = p.name.strip()
        if declared.get(key) is None and p.lat is not None and p.lng is not None:
            declared[key] = GeoPoint(p.lat, p.lng)
    return [
        PartnerRecord(name=name, facility=facility, declared_point=declared.get(name))
        for name in names
    ]


class TopologyAssembler:
    def __init__(self, config: Optional[TopologyConfig] = None) -> None:
        self.config = config if config is not None else TopologyConfig()
        self.interpolator = ArcPropertyInterpolator(self.config.arcs)
        self.arc_filter = ArcFilter(
            self.config.self_name, self.config.min_arc_distance_km
        )

    # ==========================================
    # PER-POP STAGE
    # ==========================================

    def _local_arcs(
        self, facility: FacilityNode, partners: Sequence[PositionedPartner]
    ) -> List[LocalArc]:
        arcs: List[LocalArc] = []
        for partner in partners:
            distance = haversine_km(facility.point, partner.point)
            if not self.arc_filter.keep(
                partner.name, facility.point, partner.point, distance
            ):
                logging.debug(
                    "Dropped arc %s -> %s (%.2f km)",
                    facility.name,
                    partner.name,
                    distance,
                )
                continue
            weights = self.interpolator.weights(distance)
            arcs.append(
                LocalArc(
                    facility=facility,
                    partner=partner,
                    distance_km=distance,
                    altitude=weights.altitude,
                    stroke=weights.stroke,
                )
            )
        return arcs

    def _process_pop(
        self, record: PartnershipRecord
    ) -> Tuple[FacilityNode, List[PositionedPartner], List[LocalArc]]:
        names = normalize_partners(
            [p.name for p in record.partners], self.config.self_name
        )
        facility = pop_facility(record, names)
        partners = partner_records(record, facility, names)
        positioned = layout_ring(facility, partners, self.config.ring)
        return facility, positioned, self._local_arcs(facility, positioned)

    # ==========================================
    # ASSEMBLY
    # ==========================================

    def assemble(
        self,
        reference_records: Sequence[Any] = (),
        partnership_records: Sequence[Any] = (),
    ) -> TopologySnapshot:
        references = validate_reference_records(list(reference_records))
        partnerships = validate_partnership_records(list(partnership_records))

        facilities: List[FacilityNode] = [reference_facility(r) for r in references]
        pops: List[FacilityNode] = []
        positioned: List[PositionedPartner] = []
        local_arcs: List[LocalArc] = []

        for record in partnerships:
            facility, partners, arcs = self._process_pop(record)
            pops.append(facility)
            positioned.extend(partners)
            local_arcs.extend(arcs)

        facilities.extend(pops)
        hubs = resolve_hubs(group_by_region(pops), self.config.hub_cities)
        backbone = build_backbone(hubs)

        snapshot = TopologySnapshot(
            facility_nodes=tuple(facilities),
            positioned_partners=tuple(positioned),
            local_arcs=tuple(local_arcs),
            backbone_edges=tuple(backbone),
            hub_assignments=hubs,
            render=self.config.render,
        )
        logging.info(
            "Assembled topology: %d reference sites, %d POPs, %d partners, "
            "%d local arcs, %d backbone arcs, hubs: %s",
            len(references),
            len(pops),
            len(positioned),
            len(local_arcs),
            len(backbone),
            ", ".join(
                f"{region}: {name or 'none'}"
                for region, name in snapshot.hub_names().items()
            ),
        )
        return snapshot


def assemble_topology(
    reference_records: Sequence[Any] = (),
    partnership_records: Sequence[Any] = (),
    config: Optional[TopologyConfig] = None,
) -> TopologySnapshot:
    return TopologyAssembler(config).assemble(reference_records, partnership_records)
