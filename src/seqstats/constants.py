"""Numeric limits and defaults shared across seqstats."""

# Largest number of values an OnlineAccumulator will hold
MAX_ACCUMULATOR_COUNT = 0x7FFFFFFF

# Trimmed mean/stddev keeps values within median +/- OUTLIER_SPREAD * approx_std
OUTLIER_SPREAD = 5

# Initial number of count slots in a HistogramStatistics
DEFAULT_HISTOGRAM_CAPACITY = 1024 * 1024
