"""Tests for reading, hourly series and reference series schemas."""

from __future__ import annotations

from datetime import datetime

import pandas as pd
import pytest

from hoboqc.schemas.hourly_series import validate_hourly_series
from hoboqc.schemas.qc_flags import FLAG_COUNT, ORIGIN_REGRESSED
from hoboqc.schemas.readings import (
    REQUIRED_COLUMNS,
    validate_flagged_readings,
    validate_readings,
)
from hoboqc.schemas.reference import (
    require_reference_alignment,
    validate_reference_series,
)


class TestValidateReadings:
    """Tests for the 10-minute reading schema."""

    def test_generated_data_validates(self, make_readings) -> None:
        validate_readings(make_readings(n_rows=50))

    def test_empty_dataframe_validates(self) -> None:
        validate_readings(pd.DataFrame(columns=REQUIRED_COLUMNS))

    def test_null_temperature_rejected(self, make_readings) -> None:
        df = make_readings(n_rows=10)
        df.loc[5, "ta"] = None
        with pytest.raises(ValueError, match="Null values"):
            validate_readings(df)

    def test_non_contiguous_ids_rejected(self, make_readings) -> None:
        df = make_readings(n_rows=10)
        df.loc[5:, "id"] += 1
        with pytest.raises(ValueError, match="Non-contiguous ids"):
            validate_readings(df)

    def test_irregular_cadence_rejected(self, make_readings) -> None:
        df = make_readings(n_rows=10)
        df.loc[9, "ts"] = df.loc[9, "ts"] + pd.Timedelta("5min")
        with pytest.raises(ValueError, match="Irregular cadence"):
            validate_readings(df)

    def test_flagged_readings_require_flags(self, make_readings) -> None:
        with pytest.raises(ValueError, match="Missing columns"):
            validate_flagged_readings(make_readings(n_rows=6))

    def test_flagged_readings_validate(self, make_readings, make_flagged) -> None:
        validate_flagged_readings(make_flagged(make_readings(n_rows=6), {"roc_flag": [1]}))


class TestValidateHourlySeries:
    """Tests for the hourly series schema."""

    def test_pre_infill_validates(self, make_hourly) -> None:
        validate_hourly_series(make_hourly([1.0, 2.0, 3.0], [0, 2, 1]))

    def test_th_present_on_bad_hour_rejected(self, make_hourly) -> None:
        df = make_hourly([1.0, 2.0, 3.0], [0, 2, 0])
        df.loc[1, "th"] = 2.0
        with pytest.raises(ValueError, match="Null mismatch"):
            validate_hourly_series(df)

    def test_filled_requires_no_nulls(self, make_hourly) -> None:
        df = make_hourly([1.0, 2.0], [0, 3])
        with pytest.raises(ValueError, match="Null values"):
            validate_hourly_series(df, filled=True)

    def test_filled_validates(self, make_hourly) -> None:
        df = make_hourly([1.0, 2.0], [0, 3])
        df.loc[1, "th"] = 2.1
        df.loc[1, "origin"] = ORIGIN_REGRESSED
        validate_hourly_series(df, filled=True)

    def test_unknown_origin_rejected(self, make_hourly) -> None:
        df = make_hourly([1.0, 2.0])
        df.loc[0, "origin"] = "X"
        with pytest.raises(ValueError, match="Invalid origin"):
            validate_hourly_series(df)

    def test_flag_count_above_hour_maximum_rejected(self, make_hourly) -> None:
        df = make_hourly([1.0], [31])
        with pytest.raises(ValueError, match="Out of range"):
            validate_hourly_series(df)

    def test_flag_count_column_required(self, make_hourly) -> None:
        df = make_hourly([1.0]).drop(columns=[FLAG_COUNT])
        with pytest.raises(ValueError, match="Missing columns"):
            validate_hourly_series(df)


class TestReferenceSeries:
    """Tests for reference schema and alignment."""

    def test_validates(self, make_reference) -> None:
        validate_reference_series(make_reference([1.0, 2.0, 3.0]), name="ws")

    def test_gap_rejected(self, make_reference) -> None:
        df = make_reference([1.0, 2.0, 3.0, 4.0]).drop(index=2)
        with pytest.raises(ValueError, match=r"\[reference:ws\]Irregular cadence"):
            validate_reference_series(df, name="ws")

    def test_alignment_passes(self, make_hourly, make_reference) -> None:
        require_reference_alignment(make_hourly([1.0, 2.0]), make_reference([5.0, 6.0]))

    def test_alignment_mismatch_rejected(self, make_hourly, make_reference) -> None:
        ref = make_reference([5.0, 6.0], start_ts=datetime(2018, 12, 11))
        with pytest.raises(ValueError, match="Timestamp mismatch"):
            require_reference_alignment(make_hourly([1.0, 2.0]), ref, name="wbi")
