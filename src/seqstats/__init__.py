"""seqstats: descriptive statistics for genomic pipeline measurements.

Online Welford accumulation, robust batch estimators over raw samples and
a histogram-backed equivalent for large integer-valued populations.
"""

import logging

__version__ = "0.1.0"

from .errors import (
    AccumulatorEmptyError,
    AccumulatorFinalizedError,
    AccumulatorFullError,
    InvalidWeightError,
    StatisticsError,
)
from .utils.running_stats import OnlineAccumulator
from .estimators.robust import (
    exponential_moving_average,
    exponential_moving_averages,
    median_absolute_deviation,
    mode,
    trimmed_mean_stddev,
)
from .estimators.base import DescriptiveStatistics, StatisticsSummary, summarize
from .estimators.sample_stats import SampleStatistics
from .estimators.histogram_stats import HistogramStatistics
from .io.histogram_text import format_histogram, write_histogram

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "OnlineAccumulator",
    "SampleStatistics",
    "HistogramStatistics",
    "DescriptiveStatistics",
    "StatisticsSummary",
    "summarize",
    "trimmed_mean_stddev",
    "mode",
    "median_absolute_deviation",
    "exponential_moving_average",
    "exponential_moving_averages",
    "write_histogram",
    "format_histogram",
    "StatisticsError",
    "AccumulatorFinalizedError",
    "AccumulatorEmptyError",
    "AccumulatorFullError",
    "InvalidWeightError",
]
