"""Climate indices over the filled hourly series."""

from hoboqc.indices.climate_indices import (
    ClimateIndices,
    coefficient_of_variation,
    compute_climate_indices,
    daily_summary,
    day_night_means,
    flashiness,
    fraction_regressed,
    max_change,
    mean_daily_amplitude,
    mean_temperature,
    temperature_percentiles,
)

__all__ = [
    "ClimateIndices",
    "compute_climate_indices",
    "daily_summary",
    "mean_temperature",
    "mean_daily_amplitude",
    "coefficient_of_variation",
    "flashiness",
    "max_change",
    "day_night_means",
    "fraction_regressed",
    "temperature_percentiles",
]
