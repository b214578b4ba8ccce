"""Build the hourly series from flagged 10-minute readings.

This stage:
- Groups readings by the hour they fall in (six per hour)
- Averages temperature and light intensity
- Sums per-reading flag counts into an hourly flag_count
- Discards the hourly temperature when flag_count > BAD_FLAG_COUNT and
  marks the hour for regression infill

A single failing check within an hour is tolerated; two or more mark the hour
as defective.

The output is validated against the hourly_series schema.
"""

from __future__ import annotations

import numpy as np
import pandas as pd

from hoboqc.config import BAD_FLAG_COUNT, READINGS_PER_HOUR
from hoboqc.schemas.hourly_series import HOURLY_FIELDS, validate_hourly_series
from hoboqc.schemas.qc_flags import FLAG_COUNT, ORIGIN_MEASURED, ORIGIN_REGRESSED
from hoboqc.schemas.readings import validate_flagged_readings


def build_hourly_series(
    readings_df: pd.DataFrame,
    verbose: bool = True,
) -> pd.DataFrame:
    """Aggregate flagged readings to hourly records.

    Every hour must hold exactly READINGS_PER_HOUR readings; the reading
    schema already guarantees an uninterrupted 10-minute cadence, so a short
    hour can only appear at a truncated interval boundary and is rejected.

    Args:
        readings_df: Output of clean_readings
        verbose: If True, print aggregation statistics

    Returns:
        DataFrame with HOURLY_FIELDS. th is NaN and origin is "R" for hours
        awaiting infill; origin is "H" for everything else.

    Raises:
        ValueError: If an hour is incomplete or the output fails validation
    """
    validate_flagged_readings(readings_df)

    if readings_df.empty:
        return pd.DataFrame(columns=HOURLY_FIELDS)

    df = readings_df.copy()
    df["hour_ts"] = df["ts"].dt.floor("h")

    hourly = (
        df.groupby("hour_ts", sort=True)
        .agg(
            ta_raw=("ta", "mean"),
            lux=("lux", "mean"),
            flag_count=(FLAG_COUNT, "sum"),
            n_readings=("ta", "size"),
        )
        .reset_index()
        .rename(columns={"hour_ts": "ts"})
    )

    short = hourly["n_readings"] != READINGS_PER_HOUR
    if short.any():
        raise ValueError(
            f"[hourly_series] Incomplete hours: expected {READINGS_PER_HOUR} readings "
            f"per hour ({int(short.sum())} rows) | sample: "
            f"{hourly.loc[short, 'ts'].head(5).tolist()}"
        )

    hourly["date"] = hourly["ts"].dt.strftime("%Y-%m-%d")
    hourly["hour"] = hourly["ts"].dt.hour.astype("int64")
    hourly[FLAG_COUNT] = hourly[FLAG_COUNT].astype("int64")

    bad = hourly[FLAG_COUNT] > BAD_FLAG_COUNT
    hourly["th"] = hourly["ta_raw"].where(~bad, np.nan)
    hourly["origin"] = np.where(bad, ORIGIN_REGRESSED, ORIGIN_MEASURED)

    hourly = hourly[HOURLY_FIELDS]
    validate_hourly_series(hourly)

    if verbose:
        print(
            f"[aggregate] {len(readings_df)} readings -> {len(hourly)} hours, "
            f"{int(bad.sum())} marked for infill"
        )

    return hourly
