"""Load the HOBO log and reference station series from tab-separated files.

Both loaders fail early: a missing file or a malformed column set aborts the
run before any processing happens.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pandas as pd

from hoboqc.schemas.readings import RAW_READING_FIELDS, READING_FIELDS, validate_readings
from hoboqc.schemas.reference import (
    RAW_REFERENCE_FIELDS,
    REFERENCE_FIELDS,
    validate_reference_series,
)
from hoboqc.schemas.validate import require_columns

_TS_FORMAT = "%Y-%m-%d %H:%M"


def build_timestamps(date: pd.Series, hm: pd.Series) -> pd.Series:
    """Combine date (YYYY-MM-DD) and time-of-day (HH:MM) into a naive Timestamp."""
    return pd.to_datetime(
        date.astype(str).str.strip() + " " + hm.astype(str).str.strip(),
        format=_TS_FORMAT,
    )


def _read_tsv(path: Path, columns: list[str], dataset: str) -> pd.DataFrame:
    if not path.exists():
        raise FileNotFoundError(f"[{dataset}] Input file not found: {path}")

    df = pd.read_csv(path, sep="\t")
    df.columns = [str(col).strip() for col in df.columns]
    require_columns(df.columns, columns, dataset=dataset)
    return df[columns].copy()


def load_hobo_readings(
    path: Path | str,
    start: datetime | str,
    end: datetime | str,
    skip_rows: int = 0,
    verbose: bool = True,
) -> pd.DataFrame:
    """Load HOBO readings and trim them to the analysis interval.

    Steps:
    1. Read the TSV and check the column set
    2. Drop skip_rows leading rows (instrument warm-up)
    3. Build ts from date + hm
    4. Keep start <= ts <= end
    5. Validate the reading schema (contiguous ids, 10-minute cadence)

    Args:
        path: Tab-separated file with id, date, hm, ta, lux
        start: First timestamp to keep (inclusive)
        end: Last timestamp to keep (inclusive)
        skip_rows: Leading data rows to discard
        verbose: If True, print loading statistics

    Returns:
        DataFrame with READING_FIELDS columns

    Raises:
        FileNotFoundError: If path does not exist
        ValueError: If the columns are wrong or the schema check fails
    """
    path = Path(path)
    df = _read_tsv(path, RAW_READING_FIELDS, dataset="hobo")
    total = len(df)

    df = df.iloc[skip_rows:].reset_index(drop=True)
    df["id"] = df["id"].astype("int64")
    df["ta"] = df["ta"].astype(float)
    df["lux"] = df["lux"].astype(float)
    df["ts"] = build_timestamps(df["date"], df["hm"])

    in_window = (df["ts"] >= pd.Timestamp(start)) & (df["ts"] <= pd.Timestamp(end))
    df = df.loc[in_window, READING_FIELDS].reset_index(drop=True)

    validate_readings(df)

    if verbose:
        print(
            f"[load] {path.name}: {total} rows, skipped {skip_rows} warm-up, "
            f"{len(df)} in [{start} .. {end}]"
        )

    return df


def load_reference_series(
    path: Path | str,
    name: str,
    start: datetime | str,
    end: datetime | str,
    verbose: bool = True,
) -> pd.DataFrame:
    """Load an hourly reference station series trimmed to the analysis interval.

    The interval bounds are floored to the hour so that a 10-minute interval
    ending at hh:50 keeps the reference value for hh:00.

    Args:
        path: Tab-separated file with date, hm, ta
        name: Station name used in messages (e.g., "ws")
        start: Start of the analysis interval (inclusive)
        end: End of the analysis interval (inclusive)
        verbose: If True, print loading statistics

    Returns:
        DataFrame with REFERENCE_FIELDS columns

    Raises:
        FileNotFoundError: If path does not exist
        ValueError: If the columns are wrong or the series is not hourly
    """
    path = Path(path)
    df = _read_tsv(path, RAW_REFERENCE_FIELDS, dataset=f"reference:{name}")
    total = len(df)

    df["ta"] = df["ta"].astype(float)
    df["ts"] = build_timestamps(df["date"], df["hm"])

    lo = pd.Timestamp(start).floor("h")
    hi = pd.Timestamp(end).floor("h")
    df = df.loc[(df["ts"] >= lo) & (df["ts"] <= hi), REFERENCE_FIELDS]
    df = df.reset_index(drop=True)

    validate_reference_series(df, name=name)

    if verbose:
        print(f"[load] {path.name} ({name}): {total} rows, {len(df)} in interval")

    return df
