"""Windowed statistics over fixed-size windows.

Every helper uses min_periods equal to the window width, so a point whose
window would extend past either end of the series gets NaN. Callers compare
against these values with plain < / >, and any comparison with NaN is False:
a partial window never triggers a flag.

Alignment options:
- trailing (default): window covers points i-W+1 .. i
- center=True: window covers points i-(W//2) .. i+(W//2) (W odd)
- lag=k: the trailing statistic is shifted forward by k points, so point i
  sees the window ending at i-k
"""

from __future__ import annotations

import pandas as pd


def _rolling(series: pd.Series, window: int, center: bool) -> pd.core.window.Rolling:
    if window < 1:
        raise ValueError(f"window must be >= 1, got {window}")
    if center and window % 2 == 0:
        raise ValueError(f"centered windows must have odd width, got {window}")
    return series.astype(float).rolling(window, min_periods=window, center=center)


def _apply_lag(result: pd.Series, lag: int) -> pd.Series:
    if lag < 0:
        raise ValueError(f"lag must be >= 0, got {lag}")
    return result.shift(lag) if lag else result


def rolling_variance(
    series: pd.Series,
    window: int,
    center: bool = False,
    lag: int = 0,
) -> pd.Series:
    """Sample variance (ddof=1) over each window."""
    return _apply_lag(_rolling(series, window, center).var(ddof=1), lag)


def rolling_std(
    series: pd.Series,
    window: int,
    center: bool = False,
    lag: int = 0,
) -> pd.Series:
    """Sample standard deviation (ddof=1) over each window."""
    return _apply_lag(_rolling(series, window, center).std(ddof=1), lag)


def rolling_min(
    series: pd.Series,
    window: int,
    center: bool = False,
    lag: int = 0,
) -> pd.Series:
    return _apply_lag(_rolling(series, window, center).min(), lag)


def rolling_max(
    series: pd.Series,
    window: int,
    center: bool = False,
    lag: int = 0,
) -> pd.Series:
    return _apply_lag(_rolling(series, window, center).max(), lag)


def rolling_range(
    series: pd.Series,
    window: int,
    center: bool = False,
    lag: int = 0,
) -> pd.Series:
    """Window max minus window min."""
    return rolling_max(series, window, center, lag) - rolling_min(series, window, center, lag)


def neighbour_differences(series: pd.Series) -> tuple[pd.Series, pd.Series, pd.Series]:
    """Absolute differences to the previous and next point.

    Returns:
        Tuple (backward, forward, n_neighbours). A missing neighbour contributes
        a difference of 0 and is not counted in n_neighbours.
    """
    values = series.astype(float)
    backward = (values - values.shift(1)).abs()
    forward = (values - values.shift(-1)).abs()

    n_neighbours = backward.notna().astype(int) + forward.notna().astype(int)
    return backward.fillna(0.0), forward.fillna(0.0), n_neighbours
