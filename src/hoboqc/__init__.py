"""QC, regression infill and climate indices for a HOBO temperature logger."""

__version__ = "0.1.0"
