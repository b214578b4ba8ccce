"""Tests for hourly aggregation."""

from __future__ import annotations

from datetime import datetime

import pandas as pd
import pytest

from hoboqc.aggregate.build_hourly import build_hourly_series
from hoboqc.schemas.hourly_series import HOURLY_FIELDS, validate_hourly_series
from hoboqc.schemas.qc_flags import (
    FLAG_COUNT,
    LIGHT_FLAG,
    ORIGIN_MEASURED,
    ORIGIN_REGRESSED,
    RANGE_FLAG,
    ROC_FLAG,
)


class TestBuildHourlyBasic:
    """Basic aggregation tests."""

    def test_six_readings_per_hour(self, make_readings, make_flagged) -> None:
        df = make_flagged(make_readings(n_rows=144))
        hourly = build_hourly_series(df, verbose=False)

        assert len(hourly) == 24
        assert list(hourly.columns) == HOURLY_FIELDS
        assert hourly["hour"].tolist() == list(range(24))

    def test_means(self, make_readings, make_flagged) -> None:
        ta = [float(i) for i in range(12)]
        lux = [100.0] * 6 + [400.0] * 6
        df = make_flagged(make_readings(n_rows=12, ta=ta, lux=lux))
        hourly = build_hourly_series(df, verbose=False)

        assert hourly["ta_raw"].tolist() == [2.5, 8.5]
        assert hourly["th"].tolist() == [2.5, 8.5]
        assert hourly["lux"].tolist() == [100.0, 400.0]

    def test_date_and_hour_columns(self, make_readings, make_flagged) -> None:
        start = datetime(2018, 12, 31, 23, 0)
        df = make_flagged(make_readings(n_rows=12, start_ts=start))
        hourly = build_hourly_series(df, verbose=False)

        assert hourly["date"].tolist() == ["2018-12-31", "2019-01-01"]
        assert hourly["hour"].tolist() == [23, 0]
        assert hourly["ts"].iloc[1] == pd.Timestamp("2019-01-01 00:00")

    def test_output_validates(self, make_readings, make_flagged) -> None:
        df = make_flagged(make_readings(n_rows=48), {RANGE_FLAG: [3, 4], ROC_FLAG: [3]})
        validate_hourly_series(build_hourly_series(df, verbose=False))


class TestBadHourThreshold:
    """An hour is discarded only when its flag_count exceeds 1."""

    def test_single_failing_reading_keeps_measured_mean(self, make_readings, make_flagged) -> None:
        df = make_flagged(make_readings(n_rows=12), {RANGE_FLAG: [2]})
        hourly = build_hourly_series(df, verbose=False)

        assert hourly.loc[0, FLAG_COUNT] == 1
        assert hourly.loc[0, "th"] == pytest.approx(hourly.loc[0, "ta_raw"])
        assert hourly.loc[0, "origin"] == ORIGIN_MEASURED

    def test_two_failing_readings_null_hour(self, make_readings, make_flagged) -> None:
        df = make_flagged(make_readings(n_rows=12), {RANGE_FLAG: [7, 9]})
        hourly = build_hourly_series(df, verbose=False)

        assert hourly.loc[1, FLAG_COUNT] == 2
        assert pd.isna(hourly.loc[1, "th"])
        assert not pd.isna(hourly.loc[1, "ta_raw"])
        assert hourly.loc[1, "origin"] == ORIGIN_REGRESSED
        # The other hour is untouched
        assert hourly.loc[0, "origin"] == ORIGIN_MEASURED

    def test_two_checks_on_one_reading_null_hour(self, make_readings, make_flagged) -> None:
        df = make_flagged(make_readings(n_rows=6), {RANGE_FLAG: [0], LIGHT_FLAG: [0]})
        hourly = build_hourly_series(df, verbose=False)
        assert hourly.loc[0, FLAG_COUNT] == 2
        assert pd.isna(hourly.loc[0, "th"])


class TestBuildHourlyPreconditions:
    """Malformed input is rejected."""

    def test_incomplete_hour_rejected(self, make_readings, make_flagged) -> None:
        df = make_flagged(make_readings(n_rows=9))
        with pytest.raises(ValueError, match="Incomplete hours"):
            build_hourly_series(df, verbose=False)

    def test_unflagged_input_rejected(self, make_readings) -> None:
        with pytest.raises(ValueError, match="Missing columns"):
            build_hourly_series(make_readings(n_rows=12), verbose=False)

    def test_inconsistent_flag_count_rejected(self, make_readings, make_flagged) -> None:
        df = make_flagged(make_readings(n_rows=12))
        df.loc[0, FLAG_COUNT] = 3
        with pytest.raises(ValueError, match="Flag count mismatch"):
            build_hourly_series(df, verbose=False)

    def test_empty_input(self, make_readings, make_flagged) -> None:
        hourly = build_hourly_series(make_flagged(make_readings(n_rows=0)), verbose=False)
        assert hourly.empty
        assert list(hourly.columns) == HOURLY_FIELDS
