"""Windowed statistics used by the QC checks and indices."""

from hoboqc.features.rolling_stats import (
    neighbour_differences,
    rolling_max,
    rolling_min,
    rolling_range,
    rolling_std,
    rolling_variance,
)

__all__ = [
    "rolling_variance",
    "rolling_std",
    "rolling_min",
    "rolling_max",
    "rolling_range",
    "neighbour_differences",
]
