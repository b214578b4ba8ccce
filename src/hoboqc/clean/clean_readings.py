"""Run the QC battery over loaded HOBO readings.

This stage:
- Validates input schema (early fail on malformed data)
- Sorts by ts
- Runs the five QC checks, each writing its own flag column
- Sums the flags into flag_count
- Validates output schema

Design principles:
- Cleaning != filtering: flag issues, never delete or alter readings
- Deterministic rules only: identical input gives identical flags
- Idempotent: running twice should not change results
"""

from __future__ import annotations

import pandas as pd

from hoboqc.clean.qc_checks import apply_qc_checks
from hoboqc.config import BAD_FLAG_COUNT
from hoboqc.schemas.qc_flags import FLAG_COLUMNS, FLAG_COUNT
from hoboqc.schemas.readings import (
    READING_FIELDS,
    validate_flagged_readings,
    validate_readings,
)


def summarize_flags(df: pd.DataFrame) -> dict[str, int]:
    """Count flagged readings per check plus overall totals.

    Returns:
        Dict with one entry per flag column, "any_flag" (flag_count > 0),
        "bad" (flag_count > BAD_FLAG_COUNT) and "total"
    """
    summary = {col: int(df[col].sum()) for col in FLAG_COLUMNS}
    summary["any_flag"] = int((df[FLAG_COUNT] > 0).sum())
    summary["bad"] = int((df[FLAG_COUNT] > BAD_FLAG_COUNT).sum())
    summary["total"] = int(len(df))
    return summary


def print_cleaning_stats(df: pd.DataFrame) -> None:
    """Print summary statistics after flagging."""
    summary = summarize_flags(df)
    print("[clean] QC summary:")
    print(f"  Total readings: {summary['total']}")
    print(f"  Readings with any flag: {summary['any_flag']}")
    print(f"  Readings with {FLAG_COUNT} > {BAD_FLAG_COUNT}: {summary['bad']}")

    for col in FLAG_COLUMNS:
        if summary[col] > 0:
            print(f"    {col}: {summary[col]}")

    if summary["total"] > 0:
        print(f"  Temp range: {df['ta'].min():.2f}C to {df['ta'].max():.2f}C")


def clean_readings(df: pd.DataFrame, verbose: bool = True) -> pd.DataFrame:
    """Flag 10-minute HOBO readings.

    Cleaning steps (in order):
    1. Validate input schema (early fail); readings must already be in
       chronological order with contiguous ids
    2. Apply range, rate-of-change, persistence, consistency and light checks
    3. Aggregate flags into flag_count
    4. Validate output schema

    Args:
        df: Loaded readings (READING_FIELDS)
        verbose: If True, print flag statistics (default True)

    Returns:
        Readings with flag columns and flag_count appended

    Raises:
        ValueError: If input or output fails schema validation
    """
    validate_readings(df)

    df = df[READING_FIELDS].reset_index(drop=True)
    df = apply_qc_checks(df)

    validate_flagged_readings(df)

    if verbose:
        print_cleaning_stats(df)

    return df
