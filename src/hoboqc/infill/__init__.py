"""Regression-based gap filling."""

from hoboqc.infill.regression import (
    RegressionModel,
    apply_infill,
    fit_reference_model,
    infill_hourly_series,
    select_best_model,
)

__all__ = [
    "RegressionModel",
    "fit_reference_model",
    "select_best_model",
    "apply_infill",
    "infill_hourly_series",
]
