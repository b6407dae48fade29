from peerglobe.pipeline.validation import (
    RecordValidationError,
    ReferenceRecord,
    PartnershipRecord,
    RawPartner,
    validate_reference_record,
    validate_partnership_record,
    validate_reference_records,
    validate_partnership_records,
)
from peerglobe.pipeline.io import (
    load_reference_records,
    load_partnership_records,
    save_snapshot,
)

__all__ = [
    "RecordValidationError",
    "ReferenceRecord",
    "PartnershipRecord",
    "RawPartner",
    "validate_reference_record",
    "validate_partnership_record",
    "validate_reference_records",
    "validate_partnership_records",
    "load_reference_records",
    "load_partnership_records",
    "save_snapshot",
]
