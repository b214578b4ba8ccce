"""Input file loaders."""

from hoboqc.load.readers import load_hobo_readings, load_reference_series

__all__ = ["load_hobo_readings", "load_reference_series"]
