"""Hourly aggregation."""

from hoboqc.aggregate.build_hourly import build_hourly_series

__all__ = ["build_hourly_series"]
