"""End-to-end HOBO QC pipeline.

Pipeline flow:
    load readings -> QC battery -> hourly aggregation -> regression infill
    -> climate indices -> write outputs

Every stage runs in memory first. Outputs are only written once all stages
have succeeded, so a failed precondition never leaves a partial result.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pandas as pd

from hoboqc.aggregate.build_hourly import build_hourly_series
from hoboqc.clean.clean_readings import clean_readings, summarize_flags
from hoboqc.config import PipelineConfig
from hoboqc.indices.climate_indices import (
    ClimateIndices,
    compute_climate_indices,
    daily_summary,
)
from hoboqc.infill.regression import RegressionModel, infill_hourly_series
from hoboqc.load.readers import load_hobo_readings, load_reference_series
from hoboqc.report import write_outputs


@dataclass
class PipelineResult:
    """Everything a pipeline run produced.

    Attributes:
        readings: Flagged 10-minute readings
        hourly: Hourly series before infill
        filled: Hourly series after infill
        model: Selected regression model
        candidates: Every fitted regression model, in reference order
        indices: Climate indices over the filled series
        flag_summary: Per-check flagged reading counts
        artifacts: Output name -> written path (empty when write=False)
    """

    readings: pd.DataFrame
    hourly: pd.DataFrame
    filled: pd.DataFrame
    model: RegressionModel
    candidates: list[RegressionModel]
    indices: ClimateIndices
    flag_summary: dict[str, int]
    artifacts: dict[str, Path] = field(default_factory=dict)

    def summary(self, config: PipelineConfig | None = None) -> dict[str, Any]:
        d: dict[str, Any] = {
            "indices": self.indices.to_dict(),
            "qc_flags": self.flag_summary,
            "model": self.model.to_dict(),
            "candidates": [m.to_dict() for m in self.candidates],
        }
        if config is not None:
            d["config"] = config.to_dict()
        return d


def run_pipeline(
    config: PipelineConfig,
    write: bool = True,
    verbose: bool = True,
) -> PipelineResult:
    """Run the full QC, infill and index pipeline.

    Args:
        config: Run configuration
        write: If True, write the filled series, daily summary and summary JSON
        verbose: If True, print stage progress

    Returns:
        PipelineResult

    Raises:
        FileNotFoundError: If an input file is missing
        ValueError: If any input violates its schema or a reference series is
            not aligned with the hourly HOBO series
    """
    if verbose:
        print(f"[pipeline] Analysis interval {config.start} .. {config.end}")

    readings = load_hobo_readings(
        config.hobo_path,
        start=config.start,
        end=config.end,
        skip_rows=config.skip_rows,
        verbose=verbose,
    )
    references = {
        name: load_reference_series(path, name, config.start, config.end, verbose=verbose)
        for name, path in config.reference_paths.items()
    }

    flagged = clean_readings(readings, verbose=verbose)
    hourly = build_hourly_series(flagged, verbose=verbose)
    filled, model, candidates = infill_hourly_series(hourly, references, verbose=verbose)
    indices = compute_climate_indices(filled)

    result = PipelineResult(
        readings=flagged,
        hourly=hourly,
        filled=filled,
        model=model,
        candidates=candidates,
        indices=indices,
        flag_summary=summarize_flags(flagged),
    )

    if verbose:
        print(
            f"[pipeline] {indices.n_regressed} of {indices.n_hours} hours regressed "
            f"({indices.fraction_regressed:.1%}), mean {indices.mean:.2f}C"
        )

    if write:
        result.artifacts.update(
            write_outputs(
                filled,
                daily_summary(filled),
                result.summary(config),
                config.output_path,
                config.output_dir,
            )
        )

    return result
