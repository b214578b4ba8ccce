"""Pytest configuration and fixtures."""

from __future__ import annotations

import math
from datetime import datetime
from pathlib import Path

import numpy as np
import pandas as pd
import pytest

from hoboqc.clean.qc_checks import count_flags
from hoboqc.config import BAD_FLAG_COUNT
from hoboqc.schemas.qc_flags import (
    FLAG_COLUMNS,
    FLAG_COUNT,
    ORIGIN_MEASURED,
    ORIGIN_REGRESSED,
)

START = datetime(2018, 12, 10, 0, 0)


def smooth_temps(n_rows: int, base: float = 5.0, amplitude: float = 3.0) -> list[float]:
    """Daily sine cycle sampled every 10 minutes: no QC check fires on it."""
    return [base + amplitude * math.sin(2 * math.pi * i / 144) for i in range(n_rows)]


@pytest.fixture
def make_readings():
    """Factory fixture for creating 10-minute reading DataFrames."""

    def _make(
        n_rows: int = 144,
        start_ts: datetime | None = None,
        ta: list[float] | None = None,
        lux: list[float] | float = 500.0,
        start_id: int = 1,
    ) -> pd.DataFrame:
        if start_ts is None:
            start_ts = START
        if ta is None:
            ta = smooth_temps(n_rows)

        ts = pd.date_range(start=start_ts, periods=n_rows, freq="10min")
        return pd.DataFrame(
            {
                "id": np.arange(start_id, start_id + n_rows, dtype="int64"),
                "date": ts.strftime("%Y-%m-%d"),
                "hm": ts.strftime("%H:%M"),
                "ta": np.asarray(ta, dtype=float),
                "lux": lux if np.isscalar(lux) else np.asarray(lux, dtype=float),
                "ts": ts,
            }
        )

    return _make


@pytest.fixture
def make_flagged():
    """Factory fixture: readings with all flags cleared, then selected ones set.

    flagged maps a flag column to the reading positions that should fail it.
    """

    def _make(readings: pd.DataFrame, flagged: dict[str, list[int]] | None = None) -> pd.DataFrame:
        df = readings.copy()
        for col in FLAG_COLUMNS:
            df[col] = False
        for col, positions in (flagged or {}).items():
            df.loc[positions, col] = True
        df[FLAG_COUNT] = count_flags(df)
        return df

    return _make


@pytest.fixture
def make_hourly():
    """Factory fixture for creating pre-infill hourly series DataFrames."""

    def _make(
        ta_raw: list[float],
        flag_counts: list[int] | None = None,
        start_ts: datetime | None = None,
    ) -> pd.DataFrame:
        if start_ts is None:
            start_ts = START
        n_rows = len(ta_raw)
        if flag_counts is None:
            flag_counts = [0] * n_rows

        ts = pd.date_range(start=start_ts, periods=n_rows, freq="h")
        flag_count = pd.Series(flag_counts, dtype="int64")
        bad = flag_count > BAD_FLAG_COUNT
        ta = pd.Series(ta_raw, dtype=float)

        return pd.DataFrame(
            {
                "ts": ts,
                "date": ts.strftime("%Y-%m-%d"),
                "hour": pd.Series(ts.hour, dtype="int64"),
                "ta_raw": ta,
                "th": ta.where(~bad),
                "lux": 0.0,
                FLAG_COUNT: flag_count,
                "origin": np.where(bad, ORIGIN_REGRESSED, ORIGIN_MEASURED),
            }
        )

    return _make


@pytest.fixture
def make_reference():
    """Factory fixture for creating hourly reference series DataFrames."""

    def _make(ta: list[float], start_ts: datetime | None = None) -> pd.DataFrame:
        if start_ts is None:
            start_ts = START
        ts = pd.date_range(start=start_ts, periods=len(ta), freq="h")
        return pd.DataFrame(
            {
                "date": ts.strftime("%Y-%m-%d"),
                "hm": ts.strftime("%H:%M"),
                "ta": np.asarray(ta, dtype=float),
                "ts": ts,
            }
        )

    return _make


@pytest.fixture
def write_tsv(tmp_path: Path):
    """Write a DataFrame's raw columns to a tab-separated file under tmp_path."""

    def _write(df: pd.DataFrame, name: str, columns: list[str]) -> Path:
        path = tmp_path / name
        df[columns].to_csv(path, sep="\t", index=False)
        return path

    return _write
