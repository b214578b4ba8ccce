#!/usr/bin/env python3
"""Run the HOBO QC + regression infill pipeline.

Usage:
    python scripts/run_pipeline.py --config configs/hobo_2018_12.json

    python scripts/run_pipeline.py \
        --hobo data/raw/hobo.tsv \
        --ws data/reference/ws.tsv \
        --wbi data/reference/wbi.tsv \
        --start 2018-12-10T00:00 \
        --end 2019-01-06T23:50 \
        --skip-rows 1000

Pipeline flow:
    load -> clean (QC flags) -> aggregate (hourly) -> infill -> indices -> report
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from hoboqc.config import PipelineConfig, output_dir, raw_hobo_path, reference_path
from hoboqc.pipeline import run_pipeline


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Run HOBO QC and regression infill.")

    parser.add_argument(
        "--config",
        type=Path,
        help="Path to JSON config file (overrides other arguments)",
    )
    parser.add_argument(
        "--hobo",
        type=Path,
        help="HOBO 10-minute TSV, id/date/hm/ta/lux (default: data/raw/hobo.tsv)",
    )
    parser.add_argument(
        "--ws",
        type=Path,
        help="Reference station WS hourly TSV (default: data/reference/ws.tsv)",
    )
    parser.add_argument(
        "--wbi",
        type=Path,
        help="Reference station WBI hourly TSV (default: data/reference/wbi.tsv)",
    )
    parser.add_argument("--start", help="Interval start, e.g. 2018-12-10T00:00")
    parser.add_argument("--end", help="Interval end (last reading), e.g. 2019-01-06T23:50")
    parser.add_argument(
        "--skip-rows",
        type=int,
        default=0,
        help="Leading HOBO rows to drop as warm-up (default: 0)",
    )
    parser.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Output directory (default: data/output)",
    )
    parser.add_argument("--quiet", action="store_true", help="Suppress progress output")

    return parser.parse_args()


def build_config(args: argparse.Namespace) -> PipelineConfig:
    if args.config:
        config = PipelineConfig.load(args.config)
        if args.out is not None:
            config.output_dir = args.out
        return config

    missing = [
        flag
        for flag, value in (
            ("--start", args.start),
            ("--end", args.end),
        )
        if value is None
    ]
    if missing:
        raise SystemExit(f"Missing required arguments without --config: {', '.join(missing)}")

    return PipelineConfig(
        hobo_path=args.hobo or raw_hobo_path(),
        reference_paths={
            "ws": args.ws or reference_path("ws"),
            "wbi": args.wbi or reference_path("wbi"),
        },
        start=args.start,
        end=args.end,
        skip_rows=args.skip_rows,
        output_dir=args.out if args.out is not None else output_dir(),
    )


def main() -> int:
    args = parse_args()

    try:
        config = build_config(args)
        result = run_pipeline(config, verbose=not args.quiet)
    except (FileNotFoundError, ValueError) as exc:
        print(f"[pipeline] aborted: {exc}", file=sys.stderr)
        return 1

    for name, path in result.artifacts.items():
        print(f"[pipeline] {name}: {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
