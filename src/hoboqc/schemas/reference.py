"""Reference station series schema.

Reference series are read-only hourly temperatures from independent weather
stations. They are only usable when their timestamps equal the HOBO hourly
timestamps one-to-one; there is no best-effort alignment.
"""

from __future__ import annotations

import pandas as pd

from hoboqc.schemas.validate import (
    require_columns,
    require_matching_timestamps,
    require_no_nulls,
    require_regular_cadence,
    require_unique,
)

# Columns present in the raw tab-separated file
RAW_REFERENCE_FIELDS = ["date", "hm", "ta"]

REFERENCE_FIELDS = RAW_REFERENCE_FIELDS + ["ts"]


def validate_reference_series(df: pd.DataFrame, name: str = "reference") -> None:
    """Validate a single reference station series.

    Raises:
        ValueError: If columns are missing, values are null, or the series is
            not strictly hourly
    """
    dataset = f"reference:{name}"
    require_columns(df.columns, REFERENCE_FIELDS, dataset=dataset)

    if df.empty:
        return

    require_no_nulls(df, REFERENCE_FIELDS, dataset=dataset)
    require_unique(df, ["ts"], dataset=dataset)
    require_regular_cadence(df, "ts", "1h", dataset=dataset)


def require_reference_alignment(
    hourly_df: pd.DataFrame,
    reference_df: pd.DataFrame,
    name: str = "reference",
) -> None:
    """Raise ValueError unless the reference timestamps equal the hourly ones."""
    require_matching_timestamps(
        hourly_df["ts"],
        reference_df["ts"],
        dataset=f"reference:{name}",
    )
