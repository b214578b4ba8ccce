"""Write pipeline outputs to disk.

Outputs:
- <output_name>: filled hourly series (date, hour, th, origin), tab-separated
- daily_summary.tsv: per-day mean/min/max/amplitude/n_regressed
- summary.json: climate indices, QC flag counts, selected and candidate
  regression models, frozen config

All texts are rendered before anything touches disk. Each file is then
staged to a temporary path, and only once every file is staged are they
renamed into place.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pandas as pd

from hoboqc.schemas.hourly_series import validate_hourly_series

OUTPUT_FIELDS = ["date", "hour", "th", "origin"]
DAILY_SUMMARY_NAME = "daily_summary.tsv"
RUN_SUMMARY_NAME = "summary.json"


def _atomic_write_texts(texts: dict[Path, str]) -> list[Path]:
    staged: list[tuple[Path, Path]] = []
    try:
        for path, text in texts.items():
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = path.with_suffix(path.suffix + ".tmp")
            tmp_path.write_text(text)
            staged.append((tmp_path, path))
    except OSError:
        for tmp_path, _ in staged:
            tmp_path.unlink(missing_ok=True)
        raise

    for tmp_path, path in staged:
        tmp_path.replace(path)
    return [path for _, path in staged]


def format_filled_series(df: pd.DataFrame) -> str:
    """Render the filled hourly series as TSV text with th at 3 decimals."""
    out = df[OUTPUT_FIELDS].copy()
    out["th"] = out["th"].map(lambda v: f"{v:.3f}")
    return out.to_csv(sep="\t", index=False, lineterminator="\n")


def format_daily_summary(daily_df: pd.DataFrame) -> str:
    return daily_df.to_csv(sep="\t", index=False, float_format="%.3f", lineterminator="\n")


def format_run_summary(summary: dict[str, Any]) -> str:
    return json.dumps(summary, indent=2)


def write_outputs(
    filled_df: pd.DataFrame,
    daily_df: pd.DataFrame,
    summary: dict[str, Any],
    filled_path: Path | str,
    output_dir: Path | str,
) -> dict[str, Path]:
    """Validate, render and write the three pipeline outputs together.

    Args:
        filled_df: Hourly series after infill
        daily_df: Per-day summary table
        summary: Run summary (JSON-serializable)
        filled_path: Destination of the filled hourly series
        output_dir: Directory for daily_summary.tsv and summary.json

    Returns:
        Output name ("filled", "daily", "summary") -> written path

    Raises:
        ValueError: If filled_df still has missing temperatures
        TypeError: If summary is not JSON-serializable
        OSError: If staging fails; no output file is created or replaced
    """
    filled_path = Path(filled_path)
    output_dir = Path(output_dir)
    validate_hourly_series(filled_df, filled=True)

    paths = {
        "filled": filled_path,
        "daily": output_dir / DAILY_SUMMARY_NAME,
        "summary": output_dir / RUN_SUMMARY_NAME,
    }
    texts = {
        paths["filled"]: format_filled_series(filled_df),
        paths["daily"]: format_daily_summary(daily_df),
        paths["summary"]: format_run_summary(summary),
    }
    _atomic_write_texts(texts)

    print(f"[report] wrote {len(filled_df)} hours to {filled_path}")
    return paths
