"""Quality control flag definitions.

Each QC check writes exactly one boolean column per reading. Flags are
additive: a check never clears or overwrites another check's column, and
downstream code only reads the per-reading flag_count.

Rules:
- Never delete data here
- Only label problems
- Downstream code decides what to exclude
"""

RANGE_FLAG = "range_flag"  # Temperature or lux outside plausible bounds
ROC_FLAG = "roc_flag"  # Step from previous reading too large
PERSISTENCE_FLAG = "persistence_flag"  # Temperature numerically frozen
CONSISTENCY_FLAG = "consistency_flag"  # Outlier relative to past-hour variability
LIGHT_FLAG = "light_flag"  # Daytime irradiation biasing the sensor

FLAG_COLUMNS = [
    RANGE_FLAG,
    ROC_FLAG,
    PERSISTENCE_FLAG,
    CONSISTENCY_FLAG,
    LIGHT_FLAG,
]

FLAG_COUNT = "flag_count"
MAX_FLAG_COUNT = len(FLAG_COLUMNS)

# Hourly provenance
ORIGIN_MEASURED = "H"
ORIGIN_REGRESSED = "R"
ORIGIN_CODES = (ORIGIN_MEASURED, ORIGIN_REGRESSED)
