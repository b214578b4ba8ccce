"""Hourly series schema.

An hourly record aggregates six consecutive readings sharing the same hour.
Before infill, th is null exactly where flag_count exceeds the bad-hour
threshold. After infill, th is never null and origin records whether the
value was measured or regressed.
"""

from __future__ import annotations

from typing import TypedDict

import pandas as pd

from hoboqc.config import BAD_FLAG_COUNT, READINGS_PER_HOUR
from hoboqc.schemas.qc_flags import FLAG_COUNT, MAX_FLAG_COUNT, ORIGIN_CODES
from hoboqc.schemas.validate import (
    require_columns,
    require_int_range,
    require_no_nulls,
    require_regular_cadence,
    require_unique,
)


class HourlyRecord(TypedDict):
    """One aggregated hour of HOBO data."""

    ts: pd.Timestamp  # Start of the hour
    date: str  # Calendar date, YYYY-MM-DD
    hour: int  # Hour of day, 0..23
    ta_raw: float  # Mean of the six raw temperatures
    th: float  # ta_raw, or NaN when the hour is bad (before infill)
    lux: float  # Mean light intensity
    flag_count: int  # Sum of the six per-reading flag counts
    origin: str  # "H" measured, "R" regressed


HOURLY_FIELDS = [
    "ts",
    "date",
    "hour",
    "ta_raw",
    "th",
    "lux",
    FLAG_COUNT,
    "origin",
]

REQUIRED_COLUMNS = HOURLY_FIELDS.copy()

_DATASET_NAME = "hourly_series"


def validate_hourly_series(df: pd.DataFrame, filled: bool = False) -> None:
    """Validate that a DataFrame conforms to the hourly series schema.

    Checks performed:
    - All required columns present
    - No nulls in ts, date, hour, ta_raw, lux, flag_count, origin
    - Unique, hourly-spaced ts
    - hour in [0, 23], flag_count in [0, 6 * 5]
    - origin is one of "H" / "R"
    - Before infill: th null iff flag_count > 1
    - After infill (filled=True): th has no nulls

    Args:
        df: DataFrame to validate
        filled: If True, validate the post-infill invariant

    Raises:
        ValueError: If any validation check fails
    """
    require_columns(df.columns, REQUIRED_COLUMNS, dataset=_DATASET_NAME)

    if df.empty:
        return

    require_no_nulls(
        df,
        ["ts", "date", "hour", "ta_raw", "lux", FLAG_COUNT, "origin"],
        dataset=_DATASET_NAME,
    )
    require_unique(df, ["ts"], dataset=_DATASET_NAME)
    require_regular_cadence(df, "ts", "1h", dataset=_DATASET_NAME)
    require_int_range(df, "hour", lo=0, hi=23, dataset=_DATASET_NAME)
    require_int_range(
        df, FLAG_COUNT, lo=0, hi=READINGS_PER_HOUR * MAX_FLAG_COUNT, dataset=_DATASET_NAME
    )

    bad_origin = ~df["origin"].isin(ORIGIN_CODES)
    if bad_origin.any():
        raise ValueError(
            f"[{_DATASET_NAME}] Invalid origin: expected one of {ORIGIN_CODES} "
            f"({int(bad_origin.sum())} rows)"
        )

    if filled:
        require_no_nulls(df, ["th"], dataset=_DATASET_NAME)
        return

    bad_hour = df[FLAG_COUNT] > BAD_FLAG_COUNT
    if not (df["th"].isna() == bad_hour).all():
        raise ValueError(
            f"[{_DATASET_NAME}] Null mismatch: th must be null exactly where "
            f"{FLAG_COUNT} > {BAD_FLAG_COUNT}"
        )
