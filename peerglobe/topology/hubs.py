"""
Regional hub resolution.

Policy, per region:
  1. no candidates                        -> None
  2. region has no canonical hub city     -> first candidate in input order
  3. a candidate named like the hub city  -> first such candidate
  4. otherwise                            -> candidate nearest to the hub city,
                                             earliest candidate wins ties
"""

import logging
from typing import Mapping, Optional, Sequence

import numpy as np

from peerglobe.config.settings import HubCity
from peerglobe.geo.distance import haversine_km_many
from peerglobe.geo.point import GeoPoint
from peerglobe.geo.regions import BACKBONE_REGIONS, RegionTag
from peerglobe.graph.node import FacilityNode
from peerglobe.graph.snapshot import HubAssignment, make_hub_assignment


def resolve_hub(
    region: RegionTag,
    candidates: Sequence[FacilityNode],
    hub_cities: Mapping[RegionTag, HubCity],
) -> Optional[FacilityNode]:
    if not candidates:
        return None

    hub_city = hub_cities.get(region)
    if hub_city is None:
        logging.debug(
            "%s: no canonical hub city, using first candidate %s",
            region.value,
            candidates[0].name,
        )
        return candidates[0]

    wanted = hub_city.name.strip().casefold()
    for candidate in candidates:
        if candidate.name.strip().casefold() == wanted:
            return candidate

    distances = haversine_km_many(
        GeoPoint(hub_city.lat, hub_city.lng), [c.point for c in candidates]
    )
    # argmin returns the first index among equal minima
    nearest = candidates[int(np.argmin(distances))]
    logging.debug(
        "%s: no POP named %s, nearest is %s (%.1f km)",
        region.value,
        hub_city.name,
        nearest.name,
        float(np.min(distances)),
    )
    return nearest


def resolve_hubs(
    facilities_by_region: Mapping[RegionTag, Sequence[FacilityNode]],
    hub_cities: Mapping[RegionTag, HubCity],
) -> HubAssignment:
    return make_hub_assignment(
        {
            region: resolve_hub(region, facilities_by_region.get(region, ()), hub_cities)
            for region in BACKBONE_REGIONS
        }
    )
