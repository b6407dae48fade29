from enum import Enum
from typing import Dict, Iterable, List, Tuple, TypeVar

T = TypeVar("T")


class RegionTag(str, Enum):
    APAC = "APAC"
    EMEA = "EMEA"
    NA = "NA"
    LATAM = "LATAM"
    UNKNOWN = "UNKNOWN"


# Regions that take part in hub resolution and the backbone mesh, in order.
BACKBONE_REGIONS: Tuple[RegionTag, ...] = (
    RegionTag.APAC,
    RegionTag.EMEA,
    RegionTag.NA,
    RegionTag.LATAM,
)


def classify(lat: float, lng: float) -> RegionTag:
    """
    Assign a region from coordinates. First match wins:
      - APAC:  lng >= 60
      - EMEA:  -30 < lng < 60
      - NA:    lng <= -30 and lat >= 15
      - LATAM: lng <= -30 and lat < 15
    Anything else (e.g. NaN) is UNKNOWN.
    """
    if lng >= 60:
        return RegionTag.APAC
    if -30 < lng < 60:
        return RegionTag.EMEA
    if lng <= -30 and lat >= 15:
        return RegionTag.NA
    if lng <= -30 and lat < 15:
        return RegionTag.LATAM
    return RegionTag.UNKNOWN


def group_by_region(items: Iterable[T]) -> Dict[RegionTag, List[T]]:
    """Bucket items (anything with a ``region`` attribute) per backbone region.

    Every backbone region gets a key; input order is kept inside a bucket.
    UNKNOWN items are left out.
    """
    groups: Dict[RegionTag, List[T]] = {region: [] for region in BACKBONE_REGIONS}
    for item in items:
        bucket = groups.get(item.region)
        if bucket is not None:
            bucket.append(item)
    return groups
