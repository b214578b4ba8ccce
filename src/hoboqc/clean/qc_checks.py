"""The QC check battery and flag aggregation.

Five independent plausibility checks, each producing one boolean per reading:

1. Range: temperature or light intensity outside plausible bounds
2. Rate of change: step from the previous reading above ROC_MAX_DELTA_C
3. Persistence: trailing-hour variance below tolerance (frozen sensor)
4. Consistency: combined neighbour step large relative to past-hour sigma
5. Light interference: sustained daytime irradiation above two thresholds

Checks never see each other's output. Undefined window statistics at the
series edges resolve to "not flagged".
"""

from __future__ import annotations

from datetime import time

import pandas as pd

from hoboqc.config import (
    CONSISTENCY_EPSILON,
    CONSISTENCY_SD_FACTOR,
    CONSISTENCY_WINDOW,
    DAY_END,
    DAY_START,
    LIGHT_L1,
    LIGHT_L2,
    LIGHT_NEAR_WINDOW,
    LIGHT_WIDE_WINDOW,
    LUX_MAX,
    LUX_MIN,
    PERSISTENCE_TOLERANCE,
    PERSISTENCE_WINDOW,
    ROC_MAX_DELTA_C,
    TEMP_MAX_C,
    TEMP_MIN_C,
)
from hoboqc.features.rolling_stats import (
    neighbour_differences,
    rolling_max,
    rolling_std,
    rolling_variance,
)
from hoboqc.schemas.qc_flags import (
    CONSISTENCY_FLAG,
    FLAG_COLUMNS,
    FLAG_COUNT,
    LIGHT_FLAG,
    PERSISTENCE_FLAG,
    RANGE_FLAG,
    ROC_FLAG,
)


def check_range(
    ta: pd.Series,
    lux: pd.Series,
    temp_min: float = TEMP_MIN_C,
    temp_max: float = TEMP_MAX_C,
    lux_min: float = LUX_MIN,
    lux_max: float = LUX_MAX,
) -> pd.Series:
    """Flag readings with temperature or lux outside the plausible band.

    Bounds are inclusive-valid: ta == temp_max passes. A missing value is
    not evidence of a range violation and is never flagged.
    """
    ta_bad = (ta < temp_min) | (ta > temp_max)
    lux_bad = (lux < lux_min) | (lux > lux_max)
    return (ta_bad | lux_bad).astype(bool)


def check_rate_of_change(ta: pd.Series, max_delta: float = ROC_MAX_DELTA_C) -> pd.Series:
    """Flag reading i when |ta[i] - ta[i-1]| > max_delta.

    The first reading has no predecessor and is never flagged.
    """
    delta = ta.astype(float).diff().abs()
    return delta > max_delta


def check_persistence(
    ta: pd.Series,
    window: int = PERSISTENCE_WINDOW,
    tolerance: float = PERSISTENCE_TOLERANCE,
) -> pd.Series:
    """Flag readings whose trailing window is numerically frozen.

    The window includes the current reading, so the first window-1 readings
    have no full window and are never flagged.
    """
    variance = rolling_variance(ta, window)
    return variance < tolerance


def check_consistency(
    ta: pd.Series,
    window: int = CONSISTENCY_WINDOW,
    sd_factor: float = CONSISTENCY_SD_FACTOR,
    epsilon: float = CONSISTENCY_EPSILON,
) -> pd.Series:
    """Flag readings that jump away from both neighbours relative to past variability.

    sigma is the standard deviation of the `window` readings before i
    (i-window .. i-1), so neither the reading itself nor its successor
    contributes. The combined step |ta[i]-ta[i-1]| + |ta[i]-ta[i+1]| is
    compared against (sd_factor / 2) * sigma for every neighbour that exists:
    sd_factor * sigma with both neighbours, half of it at either series end.
    """
    sigma = rolling_std(ta, window, lag=1)
    backward, forward, n_neighbours = neighbour_differences(ta)

    threshold = (sd_factor / 2.0) * sigma * n_neighbours + epsilon
    return (backward + forward) > threshold


def is_daytime(
    ts: pd.Series,
    day_start: time = DAY_START,
    day_end: time = DAY_END,
) -> pd.Series:
    """True where the time of day lies within [day_start, day_end]."""
    minutes = ts.dt.hour * 60 + ts.dt.minute
    lo = day_start.hour * 60 + day_start.minute
    hi = day_end.hour * 60 + day_end.minute
    return (minutes >= lo) & (minutes <= hi)


def check_light_interference(
    lux: pd.Series,
    ts: pd.Series,
    l1: float = LIGHT_L1,
    l2: float = LIGHT_L2,
    near_window: int = LIGHT_NEAR_WINDOW,
    wide_window: int = LIGHT_WIDE_WINDOW,
) -> pd.Series:
    """Flag daytime readings biased by direct irradiation.

    A reading is flagged when all of these hold:
    - its time of day is within DAY_START..DAY_END
    - lux exceeds l1 at the reading or an adjacent one (centered near_window)
    - lux exceeds l2 somewhere within the centered wide_window
    """
    near = rolling_max(lux, near_window, center=True) > l1
    wide = rolling_max(lux, wide_window, center=True) > l2
    return is_daytime(ts) & near & wide


def count_flags(df: pd.DataFrame) -> pd.Series:
    """Sum the five flag columns into an integer count per reading."""
    return df[FLAG_COLUMNS].fillna(False).astype(int).sum(axis=1).astype("int64")


def apply_qc_checks(df: pd.DataFrame) -> pd.DataFrame:
    """Run every QC check and attach flag columns plus flag_count.

    Args:
        df: Readings with ta, lux and ts columns, sorted by ts

    Returns:
        Copy of df with the five flag columns and flag_count appended
    """
    df = df.copy()

    if df.empty:
        for col in FLAG_COLUMNS:
            df[col] = pd.Series(dtype=bool)
        df[FLAG_COUNT] = pd.Series(dtype="int64")
        return df

    df[RANGE_FLAG] = check_range(df["ta"], df["lux"])
    df[ROC_FLAG] = check_rate_of_change(df["ta"])
    df[PERSISTENCE_FLAG] = check_persistence(df["ta"])
    df[CONSISTENCY_FLAG] = check_consistency(df["ta"])
    df[LIGHT_FLAG] = check_light_interference(df["lux"], df["ts"])
    df[FLAG_COUNT] = count_flags(df)
    return df
