"""
Structural validation of raw input records.

Business edge cases (no partners, empty regions) are not errors. Anything that
cannot be placed on the globe is: a missing name, missing or non-numeric
coordinates, NaN/inf, or values outside [-90, 90] x [-180, 180]. The first
problem found raises ``RecordValidationError``; the caller decides whether to
skip, fix or abort.
"""

from __future__ import annotations

import math
import re
from dataclasses import asdict, dataclass
from typing import Any, List, Mapping, Optional, Sequence, Tuple

REFERENCE = "reference"
PARTNERSHIP = "partnership"

# Field names used by the original peering data files.
LAT_ALIASES = ("lat", "riotLat")
LNG_ALIASES = ("lng", "riotLng")

# NUL and the other C0 controls cannot be collated or displayed.
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


class RecordValidationError(ValueError):
    def __init__(self, record_kind: str, record_index: int, field: str, reason: str):
        self.record_kind = record_kind
        self.record_index = record_index
        self.field = field
        self.reason = reason
        super().__init__(
            f"Invalid {record_kind} record #{record_index}, field '{field}': {reason}"
        )


@dataclass(frozen=True)
class ReferenceRecord:
    city: str
    lat: float
    lng: float
    region: Optional[str] = None


@dataclass(frozen=True)
class RawPartner:
    name: str
    lat: Optional[float] = None
    lng: Optional[float] = None


@dataclass(frozen=True)
class PartnershipRecord:
    city: str
    lat: float
    lng: float
    partners: Tuple[RawPartner, ...] = ()


def _is_missing(value: Any) -> bool:
    # pandas hands over NaN for empty CSV cells
    return value is None or (isinstance(value, float) and math.isnan(value))


def _first_present(record: Mapping[str, Any], keys: Sequence[str]) -> Tuple[str, Any]:
    for key in keys:
        if key in record and not _is_missing(record[key]):
            return key, record[key]
    return keys[0], None


def _coordinate(
    value: Any, limit: float, kind: str, index: int, field: str
) -> float:
    if value is None:
        raise RecordValidationError(kind, index, field, "missing coordinate")
    if isinstance(value, bool):
        raise RecordValidationError(kind, index, field, f"not a number: {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise RecordValidationError(
            kind, index, field, f"not a number: {value!r}"
        ) from None
    if not math.isfinite(number):
        raise RecordValidationError(kind, index, field, f"not finite: {value!r}")
    if not -limit <= number <= limit:
        raise RecordValidationError(
            kind, index, field, f"{number} outside [-{limit:g}, {limit:g}]"
        )
    return number


def _name(value: Any, kind: str, index: int, field: str) -> str:
    if _is_missing(value) or not isinstance(value, str) or not value.strip():
        raise RecordValidationError(kind, index, field, "missing or empty name")
    return value.strip()


def _point(record: Mapping[str, Any], kind: str, index: int) -> Tuple[float, float]:
    lat_key, lat = _first_present(record, LAT_ALIASES)
    lng_key, lng = _first_present(record, LNG_ALIASES)
    return (
        _coordinate(lat, 90.0, kind, index, lat_key),
        _coordinate(lng, 180.0, kind, index, lng_key),
    )


def _require_mapping(record: Any, kind: str, index: int) -> Mapping[str, Any]:
    if isinstance(record, (ReferenceRecord, PartnershipRecord)):
        return asdict(record)
    if not isinstance(record, Mapping):
        raise RecordValidationError(
            kind, index, "<record>", f"expected a mapping, got {type(record).__name__}"
        )
    return record


def validate_reference_record(record: Any, index: int) -> ReferenceRecord:
    record = _require_mapping(record, REFERENCE, index)
    city = _name(record.get("city"), REFERENCE, index, "city")
    lat, lng = _point(record, REFERENCE, index)
    region = record.get("region")
    return ReferenceRecord(
        city=city,
        lat=lat,
        lng=lng,
        region=None if _is_missing(region) else str(region),
    )


def _partner_name(value: Any, index: int, field: str) -> str:
    if _is_missing(value) or not isinstance(value, str):
        raise RecordValidationError(PARTNERSHIP, index, field, "missing name")
    if _CONTROL_CHARS.search(value.strip()):
        raise RecordValidationError(
            PARTNERSHIP, index, field, f"control character in name: {value!r}"
        )
    return value


def _validate_partner(raw: Any, index: int, position: int) -> RawPartner:
    prefix = f"partners[{position}]"
    if isinstance(raw, str):
        return RawPartner(name=_partner_name(raw, index, prefix))
    if not isinstance(raw, Mapping):
        raise RecordValidationError(
            PARTNERSHIP, index, prefix, f"expected a mapping, got {type(raw).__name__}"
        )
    name = _partner_name(raw.get("name"), index, f"{prefix}.name")

    # Declared coordinates are advisory but must still be sane when present.
    lat = raw.get("lat")
    lng = raw.get("lng")
    return RawPartner(
        name=name,
        lat=None
        if _is_missing(lat)
        else _coordinate(lat, 90.0, PARTNERSHIP, index, f"{prefix}.lat"),
        lng=None
        if _is_missing(lng)
        else _coordinate(lng, 180.0, PARTNERSHIP, index, f"{prefix}.lng"),
    )


def validate_partnership_record(record: Any, index: int) -> PartnershipRecord:
    record = _require_mapping(record, PARTNERSHIP, index)
    city = _name(record.get("city"), PARTNERSHIP, index, "city")
    lat, lng = _point(record, PARTNERSHIP, index)

    raw_partners = record.get("partners")
    if _is_missing(raw_partners):
        raw_partners = []
    if isinstance(raw_partners, (str, bytes)) or not isinstance(
        raw_partners, (list, tuple)
    ):
        raise RecordValidationError(PARTNERSHIP, index, "partners", "expected a list")

    partners: List[RawPartner] = [
        _validate_partner(p, index, i) for i, p in enumerate(raw_partners)
    ]
    return PartnershipRecord(city=city, lat=lat, lng=lng, partners=tuple(partners))


def validate_reference_records(records: Sequence[Any]) -> List[ReferenceRecord]:
    return [validate_reference_record(r, i) for i, r in enumerate(records)]


def validate_partnership_records(records: Sequence[Any]) -> List[PartnershipRecord]:
    return [validate_partnership_record(r, i) for i, r in enumerate(records)]
