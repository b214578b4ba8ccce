"""Schema definitions for the HOBO QC pipeline.

This package defines the contract layer - what "valid data" looks like.
Nothing here should do work, only define structure.

Schemas:
- qc_flags: Flag column vocabulary and provenance codes
- readings: 10-minute HOBO reading structure
- hourly_series: Aggregated hourly structure
- reference: Reference station series structure
- validate: Validation helpers and validators
"""

from hoboqc.schemas.hourly_series import (
    HOURLY_FIELDS,
    HourlyRecord,
    validate_hourly_series,
)
from hoboqc.schemas.qc_flags import (
    CONSISTENCY_FLAG,
    FLAG_COLUMNS,
    FLAG_COUNT,
    LIGHT_FLAG,
    ORIGIN_MEASURED,
    ORIGIN_REGRESSED,
    PERSISTENCE_FLAG,
    RANGE_FLAG,
    ROC_FLAG,
)
from hoboqc.schemas.readings import (
    RAW_READING_FIELDS,
    READING_FIELDS,
    Reading,
    validate_flagged_readings,
    validate_readings,
)
from hoboqc.schemas.reference import (
    RAW_REFERENCE_FIELDS,
    REFERENCE_FIELDS,
    require_reference_alignment,
    validate_reference_series,
)
from hoboqc.schemas.validate import (
    require_columns,
    require_contiguous_ids,
    require_int_range,
    require_matching_timestamps,
    require_no_nulls,
    require_regular_cadence,
    require_unique,
)

__all__ = [
    # QC Flags
    "RANGE_FLAG",
    "ROC_FLAG",
    "PERSISTENCE_FLAG",
    "CONSISTENCY_FLAG",
    "LIGHT_FLAG",
    "FLAG_COLUMNS",
    "FLAG_COUNT",
    "ORIGIN_MEASURED",
    "ORIGIN_REGRESSED",
    # Readings
    "Reading",
    "RAW_READING_FIELDS",
    "READING_FIELDS",
    "validate_readings",
    "validate_flagged_readings",
    # Hourly series
    "HourlyRecord",
    "HOURLY_FIELDS",
    "validate_hourly_series",
    # Reference series
    "RAW_REFERENCE_FIELDS",
    "REFERENCE_FIELDS",
    "validate_reference_series",
    "require_reference_alignment",
    # Validation helpers
    "require_columns",
    "require_no_nulls",
    "require_unique",
    "require_int_range",
    "require_contiguous_ids",
    "require_regular_cadence",
    "require_matching_timestamps",
]
