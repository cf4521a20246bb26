"""Exceptions raised for statistics contract violations.

All of them derive from ``StatisticsError`` (itself a ``ValueError``) so a
pipeline can catch one type, skip the offending record and keep going.
"""


class StatisticsError(ValueError):
    """Base class for seqstats contract violations."""


class AccumulatorFinalizedError(StatisticsError):
    """The accumulator was finalized and can no longer change."""


class AccumulatorEmptyError(StatisticsError):
    """A value was removed from an accumulator holding no values."""


class AccumulatorFullError(StatisticsError):
    """The accumulator already holds the maximum number of values."""


class InvalidWeightError(StatisticsError):
    """An exponential moving average weight fell outside [0, 1]."""


__all__ = [
    "StatisticsError",
    "AccumulatorFinalizedError",
    "AccumulatorEmptyError",
    "AccumulatorFullError",
    "InvalidWeightError",
]
