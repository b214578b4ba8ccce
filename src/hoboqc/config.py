"""Configuration settings for the HOBO QC pipeline.

Fixed QC thresholds live here as module constants so every check is
reproducible and testable in isolation. Run parameters (file paths, analysis
interval, warm-up rows) are captured in PipelineConfig, which can be frozen
to JSON alongside the output.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from datetime import datetime, time
from pathlib import Path
from typing import Any

# Range check
TEMP_MIN_C = -20.0
TEMP_MAX_C = 70.0
LUX_MIN = 0.0
LUX_MAX = 320000.0

# Rate-of-change check
ROC_MAX_DELTA_C = 1.0

# Persistence (minimum variability) check
PERSISTENCE_WINDOW = 6
PERSISTENCE_TOLERANCE = 1e-11

# Consistency (maximum variability) check
CONSISTENCY_WINDOW = 6
CONSISTENCY_SD_FACTOR = 8.0
CONSISTENCY_EPSILON = 1e-9

# Light-intensity interference check
LIGHT_L1 = 9300.1
LIGHT_L2 = 12000.0
LIGHT_NEAR_WINDOW = 3  # i-1, i, i+1
LIGHT_WIDE_WINDOW = 7  # i-3 .. i+3
DAY_START = time(6, 0)
DAY_END = time(18, 0)

# Aggregation
READINGS_PER_HOUR = 6
READING_INTERVAL = "10min"
BAD_FLAG_COUNT = 1  # an hour is bad when flag_count > BAD_FLAG_COUNT

# Indices
DAY_HOURS = range(6, 18)
INDEX_WINDOW_HOURS = 6
CV_EPSILON = 1e-9


def project_root() -> Path:
    return Path(__file__).resolve().parents[2]


def data_root() -> Path:
    return project_root() / "data"


def raw_hobo_path(name: str = "hobo.tsv") -> Path:
    return data_root() / "raw" / name


def reference_path(station: str) -> Path:
    return data_root() / "reference" / f"{station}.tsv"


def output_dir() -> Path:
    return data_root() / "output"


def _parse_ts(value: str | datetime) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


@dataclass
class PipelineConfig:
    """Configuration for a single QC + infill run.

    Attributes:
        hobo_path: Tab-separated 10-minute HOBO log (id, date, hm, ta, lux)
        reference_paths: Reference station name -> hourly TSV (date, hm, ta).
            Order matters: on equal R² the first station wins.
        start: First 10-minute timestamp of the analysis interval (inclusive)
        end: Last 10-minute timestamp of the analysis interval (inclusive)
        skip_rows: Leading data rows dropped as instrument warm-up
        output_dir: Directory for the filled series and run summary
        output_name: File name of the filled hourly series
    """

    hobo_path: Path
    reference_paths: dict[str, Path]
    start: datetime
    end: datetime
    skip_rows: int = 0
    output_dir: Path = field(default_factory=output_dir)
    output_name: str = "hobo_hourly_filled.tsv"

    def __post_init__(self) -> None:
        """Normalize types and validate after initialization."""
        self.hobo_path = Path(self.hobo_path)
        self.reference_paths = {
            name: Path(path) for name, path in self.reference_paths.items()
        }
        self.start = _parse_ts(self.start)
        self.end = _parse_ts(self.end)
        self.output_dir = Path(self.output_dir)
        self._validate()

    def _validate(self) -> None:
        errors = []

        if not self.reference_paths:
            errors.append("reference_paths must not be empty")

        if self.start >= self.end:
            errors.append(f"start ({self.start}) must be before end ({self.end})")

        if self.start.minute != 0 or self.start.second != 0:
            errors.append(f"start must be on a full hour, got {self.start}")

        # Interval must close on the last reading of an hour (hh:50)
        if self.end.minute != 60 - 60 // READINGS_PER_HOUR:
            errors.append(f"end must be the last reading of an hour, got {self.end}")

        if self.skip_rows < 0:
            errors.append(f"skip_rows must be >= 0, got {self.skip_rows}")

        if errors:
            raise ValueError("PipelineConfig validation failed:\n  - " + "\n  - ".join(errors))

    @property
    def output_path(self) -> Path:
        return self.output_dir / self.output_name

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary for JSON serialization."""
        d = asdict(self)
        d["hobo_path"] = str(self.hobo_path)
        d["reference_paths"] = {k: str(v) for k, v in self.reference_paths.items()}
        d["start"] = self.start.isoformat()
        d["end"] = self.end.isoformat()
        d["output_dir"] = str(self.output_dir)
        return d

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def save(self, path: Path | str) -> Path:
        """Save config to JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_json())
        return path

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> PipelineConfig:
        return cls(**d)

    @classmethod
    def load(cls, path: Path | str) -> PipelineConfig:
        """Load config from JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        return cls.from_dict(json.loads(path.read_text()))
