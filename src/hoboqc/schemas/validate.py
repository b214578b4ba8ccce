"""Validation helpers for schema enforcement.

These helpers guard the pipeline's hard preconditions. All of them raise
ValueError with actionable messages including:
- Dataset name (if provided)
- Offending columns
- Count of failing rows
- Sample of failing row indices (first 5)
"""

from __future__ import annotations

from typing import Any, Iterable

import pandas as pd


def _format_error(
    dataset: str | None,
    rule: str,
    detail: str,
    failing_indices: list[Any] | None = None,
    count: int | None = None,
) -> str:
    """Format a validation error message consistently."""
    parts = []
    if dataset:
        parts.append(f"[{dataset}]")
    parts.append(rule)
    parts.append(f": {detail}")
    if count is not None:
        parts.append(f" ({count} rows)")
    if failing_indices:
        sample = failing_indices[:5]
        parts.append(f" | sample indices: {sample}")
    return "".join(parts)


def require_columns(
    df_columns: Iterable[str],
    required: Iterable[str],
    dataset: str | None = None,
) -> None:
    """Raise ValueError if required columns are missing.

    Args:
        df_columns: Column names from a DataFrame (e.g., df.columns)
        required: Required column names
        dataset: Optional dataset name for error messages

    Raises:
        ValueError: If any required columns are missing
    """
    missing = set(required) - set(df_columns)
    if missing:
        raise ValueError(
            _format_error(dataset, "Missing columns", f"{sorted(missing)}")
        )


def require_no_nulls(
    df: pd.DataFrame,
    cols: Iterable[str],
    dataset: str | None = None,
) -> None:
    """Raise ValueError if specified columns contain null values.

    Args:
        df: DataFrame to check
        cols: Column names that must not have nulls
        dataset: Optional dataset name for error messages

    Raises:
        ValueError: If any specified columns have null values
    """
    for col in cols:
        if col not in df.columns:
            continue  # Let require_columns handle missing columns

        null_mask = df[col].isna()
        null_count = int(null_mask.sum())
        if null_count > 0:
            raise ValueError(
                _format_error(
                    dataset,
                    "Null values",
                    f"column '{col}' has nulls",
                    df.index[null_mask].tolist(),
                    null_count,
                )
            )


def require_unique(
    df: pd.DataFrame,
    key_cols: list[str],
    dataset: str | None = None,
) -> None:
    """Raise ValueError if key columns have duplicate combinations."""
    if df.empty:
        return

    for col in key_cols:
        if col not in df.columns:
            return

    dup_mask = df.duplicated(subset=key_cols, keep=False)
    dup_count = int(dup_mask.sum())
    if dup_count > 0:
        raise ValueError(
            _format_error(
                dataset,
                "Duplicate keys",
                f"columns {key_cols} have duplicates",
                df.index[dup_mask].tolist(),
                dup_count,
            )
        )


def require_int_range(
    df: pd.DataFrame,
    col: str,
    lo: int,
    hi: int,
    dataset: str | None = None,
) -> None:
    """Raise ValueError if integer values are outside [lo, hi].

    Args:
        df: DataFrame to check
        col: Column name to check
        lo: Minimum allowed value (inclusive)
        hi: Maximum allowed value (inclusive)
        dataset: Optional dataset name for error messages

    Raises:
        ValueError: If values are outside range or not integer-typed
    """
    if col not in df.columns or df.empty:
        return

    series = df[col]
    if not pd.api.types.is_integer_dtype(series):
        raise ValueError(
            _format_error(
                dataset,
                "Dtype mismatch",
                f"column '{col}' must be integer, got {series.dtype}",
            )
        )

    out_of_range = (series < lo) | (series > hi)
    bad_count = int(out_of_range.sum())
    if bad_count > 0:
        raise ValueError(
            _format_error(
                dataset,
                "Out of range",
                f"column '{col}' must be in [{lo}, {hi}]",
                series.index[out_of_range].tolist(),
                bad_count,
            )
        )


def require_contiguous_ids(
    df: pd.DataFrame,
    col: str = "id",
    dataset: str | None = None,
) -> None:
    """Raise ValueError if an integer id column does not step by exactly 1.

    Args:
        df: DataFrame to check (in row order)
        col: Id column name
        dataset: Optional dataset name for error messages

    Raises:
        ValueError: If any id is not its predecessor + 1
    """
    if col not in df.columns or len(df) < 2:
        return

    step = df[col].diff().iloc[1:]
    broken = step != 1
    bad_count = int(broken.sum())
    if bad_count > 0:
        raise ValueError(
            _format_error(
                dataset,
                "Non-contiguous ids",
                f"column '{col}' must increase by 1 per row",
                step.index[broken].tolist(),
                bad_count,
            )
        )


def require_regular_cadence(
    df: pd.DataFrame,
    ts_col: str,
    freq: str,
    dataset: str | None = None,
) -> None:
    """Raise ValueError if timestamps are not strictly spaced by freq.

    Gaps are never resampled, so any missing or duplicated timestamp is a
    precondition failure.

    Args:
        df: DataFrame to check (in row order)
        ts_col: Timestamp column name
        freq: Expected spacing as a pandas offset alias (e.g., "10min", "1h")
        dataset: Optional dataset name for error messages

    Raises:
        ValueError: If any consecutive pair is not exactly freq apart
    """
    if ts_col not in df.columns or len(df) < 2:
        return

    expected = pd.Timedelta(freq)
    step = df[ts_col].diff().iloc[1:]
    irregular = step != expected
    bad_count = int(irregular.sum())
    if bad_count > 0:
        raise ValueError(
            _format_error(
                dataset,
                "Irregular cadence",
                f"column '{ts_col}' must be spaced by {freq}",
                step.index[irregular].tolist(),
                bad_count,
            )
        )


def require_matching_timestamps(
    left: pd.Series,
    right: pd.Series,
    dataset: str | None = None,
) -> None:
    """Raise ValueError unless two timestamp sequences are identical.

    Length and element-wise equality are both required. No alignment is
    attempted.

    Args:
        left: Reference timestamp sequence
        right: Timestamp sequence that must equal left
        dataset: Optional dataset name for error messages

    Raises:
        ValueError: If lengths differ or any position disagrees
    """
    if len(left) != len(right):
        raise ValueError(
            _format_error(
                dataset,
                "Length mismatch",
                f"expected {len(left)} timestamps, got {len(right)}",
            )
        )

    left_values = left.reset_index(drop=True)
    right_values = right.reset_index(drop=True)
    mismatch = left_values != right_values
    bad_count = int(mismatch.sum())
    if bad_count > 0:
        raise ValueError(
            _format_error(
                dataset,
                "Timestamp mismatch",
                "timestamps do not align",
                mismatch.index[mismatch].tolist(),
                bad_count,
            )
        )
