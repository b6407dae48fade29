import logging
from typing import TYPE_CHECKING, List, Sequence

from peerglobe.geo.layout import ring_positions, ring_radius
from peerglobe.graph.node import FacilityNode, PartnerRecord, PositionedPartner

if TYPE_CHECKING:
    from peerglobe.config.settings import RingLayoutConfig


def layout_ring(
    facility: FacilityNode,
    partners: Sequence[PartnerRecord],
    config: "RingLayoutConfig",
) -> List[PositionedPartner]:
    """Place ``partners`` on a ring around ``facility``, one slot per record, in order.

    Declared partner coordinates play no part in the placement.
    """
    slots = ring_positions(facility.point, len(partners), config)
    if slots:
        declared = sum(1 for p in partners if p.declared_point is not None)
        logging.debug(
            "Ring for %s: %d partners (%d declared coordinates replaced), radius %.3f deg",
            facility.name,
            len(partners),
            declared,
            ring_radius(len(partners), config),
        )
    return [
        PositionedPartner(name=p.name, point=point, facility=facility, angle=angle)
        for p, (angle, point) in zip(partners, slots)
    ]
