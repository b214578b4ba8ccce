"""Canonical 10-minute reading schema.

This defines what every HOBO reading must look like once loaded. This schema
is what:
- the loader outputs
- the QC battery expects
- the hourly aggregation consumes

Non-negotiables:
- ts is a naive local timestamp built from date + hm
- ts is strictly increasing with a fixed 10-minute spacing
- id is contiguous after warm-up and interval trimming
- ta is Celsius, lux is lux
"""

from __future__ import annotations

from typing import TypedDict

import pandas as pd

from hoboqc.config import READING_INTERVAL
from hoboqc.schemas.qc_flags import FLAG_COLUMNS, FLAG_COUNT, MAX_FLAG_COUNT
from hoboqc.schemas.validate import (
    require_columns,
    require_contiguous_ids,
    require_int_range,
    require_no_nulls,
    require_regular_cadence,
    require_unique,
)


class Reading(TypedDict):
    """One 10-minute HOBO reading."""

    id: int  # Logger sequence number
    date: str  # Calendar date, YYYY-MM-DD
    hm: str  # Time of day, HH:MM
    ta: float  # Temperature in Celsius
    lux: float  # Light intensity in lux
    ts: pd.Timestamp  # date + hm


# Columns present in the raw tab-separated file
RAW_READING_FIELDS = ["id", "date", "hm", "ta", "lux"]

# Column order after loading
READING_FIELDS = RAW_READING_FIELDS + ["ts"]

REQUIRED_COLUMNS = READING_FIELDS.copy()

_DATASET_NAME = "readings"


def validate_readings(df: pd.DataFrame) -> None:
    """Validate that a DataFrame conforms to the reading schema.

    Checks performed:
    - All required columns present
    - No nulls in any required column
    - Unique ts
    - id steps by exactly 1
    - ts spaced by exactly 10 minutes

    Raises:
        ValueError: If any validation check fails
    """
    require_columns(df.columns, REQUIRED_COLUMNS, dataset=_DATASET_NAME)

    if df.empty:
        return

    require_no_nulls(df, REQUIRED_COLUMNS, dataset=_DATASET_NAME)
    require_unique(df, ["ts"], dataset=_DATASET_NAME)
    require_contiguous_ids(df, "id", dataset=_DATASET_NAME)
    require_regular_cadence(df, "ts", READING_INTERVAL, dataset=_DATASET_NAME)


def validate_flagged_readings(df: pd.DataFrame) -> None:
    """Validate readings after the QC battery has run.

    On top of validate_readings:
    - Every flag column and flag_count present
    - flag_count in [0, 5] and equal to the sum of the flag columns

    Raises:
        ValueError: If any validation check fails
    """
    dataset = "flagged_readings"
    validate_readings(df)
    require_columns(df.columns, FLAG_COLUMNS + [FLAG_COUNT], dataset=dataset)

    if df.empty:
        return

    require_no_nulls(df, FLAG_COLUMNS + [FLAG_COUNT], dataset=dataset)
    require_int_range(df, FLAG_COUNT, lo=0, hi=MAX_FLAG_COUNT, dataset=dataset)

    expected = df[FLAG_COLUMNS].astype(int).sum(axis=1)
    mismatch = expected != df[FLAG_COUNT]
    if mismatch.any():
        raise ValueError(
            f"[{dataset}] Flag count mismatch: {FLAG_COUNT} must equal the sum "
            f"of {FLAG_COLUMNS} ({int(mismatch.sum())} rows)"
        )
