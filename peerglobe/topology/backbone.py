from typing import List, Tuple

from peerglobe.geo.distance import haversine_km
from peerglobe.geo.regions import RegionTag
from peerglobe.graph.edge import BackboneEdge
from peerglobe.graph.snapshot import HubAssignment

# Complete graph over the four backbone regions, in emission order.
BACKBONE_PAIRS: Tuple[Tuple[RegionTag, RegionTag], ...] = (
    (RegionTag.APAC, RegionTag.EMEA),  # Asia-Europe
    (RegionTag.EMEA, RegionTag.NA),  # Trans-Atlantic
    (RegionTag.NA, RegionTag.LATAM),  # Americas
    (RegionTag.APAC, RegionTag.NA),  # Trans-Pacific
    (RegionTag.EMEA, RegionTag.LATAM),  # Europe-South America
    (RegionTag.APAC, RegionTag.LATAM),  # Asia-South America
)


def build_backbone(hubs: HubAssignment) -> List[BackboneEdge]:
    """Hub-to-hub edges for every fixed pair whose two hubs are resolved."""
    edges: List[BackboneEdge] = []
    for region_a, region_b in BACKBONE_PAIRS:
        hub_a = hubs.get(region_a)
        hub_b = hubs.get(region_b)
        if hub_a is None or hub_b is None:
            continue
        edges.append(
            BackboneEdge(
                from_region=region_a,
                to_region=region_b,
                from_hub=hub_a,
                to_hub=hub_b,
                distance_km=haversine_km(hub_a.point, hub_b.point),
            )
        )
    return edges
