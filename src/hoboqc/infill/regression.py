"""Regression infill of defective hours from reference station data.

One ordinary least squares model, ta_raw ~ intercept + slope * reference, is
fitted per reference station. Training uses every hour, flagged ones
included: flagged hourly means are still informative about the relationship
and excluding them would shrink the training set exactly where data is
sparsest. The station with the highest R² is selected and its predictions
replace th for the hours marked for infill. Nothing else changes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
import pandas as pd
from sklearn.linear_model import LinearRegression

from hoboqc.schemas.hourly_series import validate_hourly_series
from hoboqc.schemas.qc_flags import ORIGIN_MEASURED, ORIGIN_REGRESSED
from hoboqc.schemas.reference import require_reference_alignment


@dataclass
class RegressionModel:
    """Fitted linear mapping from a reference temperature to HOBO temperature.

    Attributes:
        reference: Reference station name
        intercept: Fitted intercept (°C)
        slope: Fitted slope
        r2: Coefficient of determination on the training hours
        n_samples: Number of hours used for fitting
    """

    reference: str
    intercept: float
    slope: float
    r2: float
    n_samples: int

    def predict(self, reference_ta: pd.Series | np.ndarray) -> np.ndarray:
        return self.intercept + self.slope * np.asarray(reference_ta, dtype=float)

    def to_dict(self) -> dict[str, Any]:
        return {
            "reference": self.reference,
            "intercept": round(self.intercept, 6),
            "slope": round(self.slope, 6),
            "r2": round(self.r2, 6),
            "n_samples": self.n_samples,
        }


def fit_reference_model(
    hourly_df: pd.DataFrame,
    reference_df: pd.DataFrame,
    name: str,
) -> RegressionModel:
    """Fit ta_raw against one reference series.

    Args:
        hourly_df: Hourly series (before or after infill)
        reference_df: Reference series aligned 1:1 with hourly_df
        name: Reference station name

    Returns:
        Fitted RegressionModel

    Raises:
        ValueError: If the reference series is not aligned with hourly_df, or
            fewer than two hours are available
    """
    require_reference_alignment(hourly_df, reference_df, name=name)

    if len(hourly_df) < 2:
        raise ValueError(f"[infill] Need at least 2 hours to fit {name}, got {len(hourly_df)}")

    X = reference_df["ta"].to_numpy(dtype=float).reshape(-1, 1)
    y = hourly_df["ta_raw"].to_numpy(dtype=float)

    model = LinearRegression()
    model.fit(X, y)

    return RegressionModel(
        reference=name,
        intercept=float(model.intercept_),
        slope=float(model.coef_[0]),
        r2=float(model.score(X, y)),
        n_samples=len(y),
    )


def select_best_model(models: list[RegressionModel]) -> RegressionModel:
    """Return the model with the highest R².

    Only a strictly higher R² replaces the current best, so on a tie the
    earlier model in the list wins.
    """
    if not models:
        raise ValueError("[infill] No regression models to select from")

    best = models[0]
    for candidate in models[1:]:
        if candidate.r2 > best.r2:
            best = candidate
    return best


def apply_infill(
    hourly_df: pd.DataFrame,
    reference_df: pd.DataFrame,
    model: RegressionModel,
) -> pd.DataFrame:
    """Replace missing th values with the model's predictions.

    Args:
        hourly_df: Hourly series with th NaN for bad hours
        reference_df: Reference series the model was fitted on
        model: Selected regression model

    Returns:
        Copy of hourly_df with th filled and origin set to "R" for filled
        hours and "H" for the rest
    """
    require_reference_alignment(hourly_df, reference_df, name=model.reference)

    df = hourly_df.copy()
    missing = df["th"].isna().to_numpy()
    predicted = model.predict(reference_df["ta"])

    df["th"] = np.where(missing, predicted, df["th"].to_numpy(dtype=float))
    df["origin"] = np.where(missing, ORIGIN_REGRESSED, ORIGIN_MEASURED)
    return df


def infill_hourly_series(
    hourly_df: pd.DataFrame,
    references: dict[str, pd.DataFrame],
    verbose: bool = True,
) -> tuple[pd.DataFrame, RegressionModel, list[RegressionModel]]:
    """Fit one model per reference, select the best, and fill bad hours.

    Args:
        hourly_df: Output of build_hourly_series
        references: Station name -> reference series, in priority order
        verbose: If True, print model statistics

    Returns:
        Tuple (filled hourly series, selected model, all fitted models)

    Raises:
        ValueError: If any reference is misaligned or the result still has
            missing temperatures
    """
    validate_hourly_series(hourly_df)

    models = [
        fit_reference_model(hourly_df, ref_df, name)
        for name, ref_df in references.items()
    ]
    best = select_best_model(models)

    if verbose:
        for m in models:
            marker = "*" if m is best else " "
            print(
                f"[infill] {marker} {m.reference}: th = {m.intercept:.3f} + "
                f"{m.slope:.3f} * ta_{m.reference} (R² = {m.r2:.4f}, n = {m.n_samples})"
            )

    filled = apply_infill(hourly_df, references[best.reference], best)
    validate_hourly_series(filled, filled=True)

    if verbose:
        n_regressed = int((filled["origin"] == ORIGIN_REGRESSED).sum())
        print(f"[infill] Regressed {n_regressed} of {len(filled)} hours using {best.reference}")

    return filled, best, models
