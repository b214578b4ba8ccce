"""Climate indices over the filled hourly series.

All functions are pure and read only th, ts/date/hour and origin. Flags are
not consulted; the only QC-derived index is the fraction of regressed hours.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
import pandas as pd

from hoboqc.config import CV_EPSILON, DAY_HOURS, INDEX_WINDOW_HOURS
from hoboqc.features.rolling_stats import rolling_range
from hoboqc.schemas.hourly_series import validate_hourly_series
from hoboqc.schemas.qc_flags import ORIGIN_REGRESSED


@dataclass
class ClimateIndices:
    """Summary statistics of one filled hourly series.

    Attributes:
        n_hours: Number of hourly records
        n_regressed: Hours whose value came from the regression model
        mean: Mean temperature (°C)
        minimum: Lowest hourly temperature (°C)
        maximum: Highest hourly temperature (°C)
        mean_daily_amplitude: Mean over days of (daily max - daily min) (°C)
        coefficient_of_variation: Sample std / mean (NaN when mean ~ 0)
        flashiness: Mean absolute hour-to-hour change (°C)
        max_change_6h: Largest max - min within any 6-hour window (°C)
        day_mean: Mean over hours 06..17 (°C)
        night_mean: Mean over hours 18..05 (°C)
        fraction_regressed: n_regressed / n_hours
        percentiles: 10th, 50th and 90th percentile (°C)
    """

    n_hours: int
    n_regressed: int
    mean: float
    minimum: float
    maximum: float
    mean_daily_amplitude: float
    coefficient_of_variation: float
    flashiness: float
    max_change_6h: float
    day_mean: float
    night_mean: float
    fraction_regressed: float
    percentiles: dict[str, float]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        d: dict[str, Any] = {
            "n_hours": self.n_hours,
            "n_regressed": self.n_regressed,
        }
        for key in (
            "mean",
            "minimum",
            "maximum",
            "mean_daily_amplitude",
            "coefficient_of_variation",
            "flashiness",
            "max_change_6h",
            "day_mean",
            "night_mean",
            "fraction_regressed",
        ):
            d[key] = _round(getattr(self, key))
        d["percentiles"] = {k: _round(v) for k, v in self.percentiles.items()}
        return d


def _round(value: float, digits: int = 4) -> float | None:
    if value is None or np.isnan(value):
        return None
    return round(float(value), digits)


def mean_temperature(th: pd.Series) -> float:
    return float(th.mean())


def mean_daily_amplitude(df: pd.DataFrame) -> float:
    """Average over calendar days of (max - min) hourly temperature."""
    daily = df.groupby("date")["th"].agg(["max", "min"])
    return float((daily["max"] - daily["min"]).mean())


def coefficient_of_variation(th: pd.Series, epsilon: float = CV_EPSILON) -> float:
    """Sample standard deviation divided by the mean.

    Returns NaN instead of an infinity when the mean is within epsilon of 0.
    """
    mean = th.mean()
    if abs(mean) < epsilon:
        return float("nan")
    return float(th.std(ddof=1) / mean)


def flashiness(th: pd.Series) -> float:
    """Mean absolute first difference (n-1 terms for n hours)."""
    return float(th.diff().abs().mean())


def max_change(th: pd.Series, window: int = INDEX_WINDOW_HOURS) -> float:
    """Largest (max - min) over all full trailing windows of `window` hours."""
    return float(rolling_range(th, window).max())


def day_night_means(df: pd.DataFrame, day_hours: range = DAY_HOURS) -> tuple[float, float]:
    """Mean temperature over day hours and over the remaining (night) hours."""
    is_day = df["hour"].isin(list(day_hours))
    return float(df.loc[is_day, "th"].mean()), float(df.loc[~is_day, "th"].mean())


def fraction_regressed(df: pd.DataFrame) -> float:
    if df.empty:
        return float("nan")
    return float((df["origin"] == ORIGIN_REGRESSED).mean())


def temperature_percentiles(
    th: pd.Series,
    quantiles: tuple[float, ...] = (0.1, 0.5, 0.9),
) -> dict[str, float]:
    return {f"p{int(round(q * 100))}": float(th.quantile(q)) for q in quantiles}


def daily_summary(df: pd.DataFrame) -> pd.DataFrame:
    """Per-day mean, min, max, amplitude and number of regressed hours."""
    grouped = df.groupby("date", sort=True)
    daily = grouped.agg(
        mean=("th", "mean"),
        minimum=("th", "min"),
        maximum=("th", "max"),
        n_hours=("th", "size"),
    )
    daily["amplitude"] = daily["maximum"] - daily["minimum"]
    daily["n_regressed"] = grouped["origin"].apply(
        lambda s: int((s == ORIGIN_REGRESSED).sum())
    )
    return daily.reset_index()


def compute_climate_indices(df: pd.DataFrame) -> ClimateIndices:
    """Compute every index over a filled hourly series.

    Args:
        df: Output of infill_hourly_series

    Returns:
        ClimateIndices

    Raises:
        ValueError: If df is not a valid filled hourly series
    """
    validate_hourly_series(df, filled=True)

    th = df["th"].astype(float)
    day_mean, night_mean = day_night_means(df)

    return ClimateIndices(
        n_hours=len(df),
        n_regressed=int((df["origin"] == ORIGIN_REGRESSED).sum()),
        mean=mean_temperature(th),
        minimum=float(th.min()),
        maximum=float(th.max()),
        mean_daily_amplitude=mean_daily_amplitude(df),
        coefficient_of_variation=coefficient_of_variation(th),
        flashiness=flashiness(th),
        max_change_6h=max_change(th),
        day_mean=day_mean,
        night_mean=night_mean,
        fraction_regressed=fraction_regressed(df),
        percentiles=temperature_percentiles(th),
    )
