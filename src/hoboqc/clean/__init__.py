"""Quality control of 10-minute readings."""

from hoboqc.clean.clean_readings import clean_readings, summarize_flags
from hoboqc.clean.qc_checks import (
    apply_qc_checks,
    check_consistency,
    check_light_interference,
    check_persistence,
    check_range,
    check_rate_of_change,
    count_flags,
)

__all__ = [
    "clean_readings",
    "summarize_flags",
    "apply_qc_checks",
    "check_range",
    "check_rate_of_change",
    "check_persistence",
    "check_consistency",
    "check_light_interference",
    "count_flags",
]
