"""Histogram-backed statistics for non-negative integer samples.

Stores one count per possible value instead of every sample, so a few
billion coverage depths or read lengths cost no more memory than the
largest value seen. Aggregates are recomputed from the counts by weighted
passes, never by sorting.
"""

from __future__ import annotations

import logging
import numbers
from typing import TextIO

import numpy as np

from ..constants import DEFAULT_HISTOGRAM_CAPACITY
from ..io.histogram_text import write_histogram

logger = logging.getLogger(__name__)

_MAX_BUCKET_COUNT = int(np.iinfo(np.uint64).max)


def _cumulative_threshold(counts: np.ndarray, half: int) -> int:
    """First index where the running total of `counts` is no longer below `half`."""
    return int(np.searchsorted(np.cumsum(counts), half, side="left"))


class HistogramStatistics:
    """Counts of non-negative integer values with lazily computed aggregates.

    The counts array grows by doubling whenever a value lands past its
    capacity. Every `add()` invalidates the cached aggregates; the next
    read recomputes them all.

    Parameters
    ----------
    initial_capacity : int
        Number of count slots allocated up front.

    Attributes
    ----------
    capacity : int
        Currently allocated number of slots.
    histogram_max : int
        Largest value added so far (0 when empty).
    number_of_objects : int
        Total count over all values.
    mean, stddev : float
        Weighted mean and sample standard deviation (n-1 denominator).
    mode : int
        Value with the largest count, lowest value on ties.
    median : int
        Smallest value where the cumulative count reaches ceil(n / 2).
        For an even n this is the lower central value, whereas
        `SampleStatistics.median` picks the upper one.
    mad : int
        Median absolute deviation, same cumulative rule.
    """

    def __init__(self, initial_capacity: int = DEFAULT_HISTOGRAM_CAPACITY):
        if initial_capacity < 1:
            raise ValueError(f"initial_capacity must be >= 1, got {initial_capacity}")
        self._histogram = np.zeros(int(initial_capacity), dtype=np.uint64)
        self._histogram_max = 0
        self._finalized = False
        self._clear_statistics()

    def _clear_statistics(self) -> None:
        self._num_objs = 0
        self._mean = 0.0
        self._stddev = 0.0
        self._mode = 0
        self._median = 0
        self._mad = 0

    def _grow(self, value: int) -> None:
        alloc = self._histogram.size
        while alloc <= value:
            alloc *= 2
        logger.debug("growing histogram from %d to %d slots", self._histogram.size, alloc)

        grown = np.zeros(alloc, dtype=np.uint64)
        grown[: self._histogram_max + 1] = self._histogram[: self._histogram_max + 1]
        self._histogram = grown

    def add(self, value: int, count: int = 1) -> None:
        """Record `count` occurrences of `value`.

        Raises
        ------
        ValueError
            If `value` or `count` is not a non-negative integer (bools
            included), or the count for `value` would pass the uint64 range.
        """
        if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value < 0:
            raise ValueError(f"value must be a non-negative integer, got {value!r}")
        if isinstance(count, bool) or not isinstance(count, numbers.Integral) or count < 0:
            raise ValueError(f"count must be a non-negative integer, got {count!r}")
        value = int(value)
        count = int(count)

        if value <= self._histogram_max and int(self._histogram[value]) + count > _MAX_BUCKET_COUNT:
            raise ValueError(f"count for value {value} would exceed {_MAX_BUCKET_COUNT}")
        if count > _MAX_BUCKET_COUNT:
            raise ValueError(f"count must be at most {_MAX_BUCKET_COUNT}, got {count}")

        if value >= self._histogram.size:
            self._grow(value)

        if value > self._histogram_max:
            self._histogram_max = value

        self._histogram[value] += np.uint64(count)
        self._finalized = False

    def finalize_data(self) -> None:
        """Recompute the aggregates if values were added since the last read."""
        if self._finalized:
            return

        self._clear_statistics()

        counts = self._histogram[: self._histogram_max + 1]
        index = np.arange(counts.size, dtype=float)
        weights = counts.astype(float)

        self._num_objs = int(counts.sum())
        logger.debug("recomputing histogram statistics over %d objects", self._num_objs)

        if self._num_objs > 0:
            self._mean = float(np.dot(index, weights)) / self._num_objs
        if self._num_objs > 1:
            spread = float(np.dot(weights, (index - self._mean) ** 2))
            self._stddev = float(np.sqrt(spread / (self._num_objs - 1)))

        # argmax returns the lowest index among equal counts
        self._mode = int(np.argmax(counts))

        half = (self._num_objs + 1) // 2
        self._median = _cumulative_threshold(counts, half)

        deviations = np.abs(np.arange(counts.size, dtype=np.int64) - self._median)
        mad_counts = np.zeros(counts.size, dtype=np.uint64)
        np.add.at(mad_counts, deviations, counts)
        self._mad = _cumulative_threshold(mad_counts, half)

        self._finalized = True

    @property
    def number_of_objects(self) -> int:
        self.finalize_data()
        return self._num_objs

    @property
    def mean(self) -> float:
        self.finalize_data()
        return self._mean

    @property
    def stddev(self) -> float:
        self.finalize_data()
        return self._stddev

    @property
    def mode(self) -> int:
        self.finalize_data()
        return self._mode

    @property
    def median(self) -> int:
        self.finalize_data()
        return self._median

    @property
    def mad(self) -> int:
        self.finalize_data()
        return self._mad

    def histogram(self, value: int) -> int:
        """Count recorded for `value` (0 for anything never added)."""
        if value < 0 or value > self._histogram_max:
            return 0
        return int(self._histogram[value])

    @property
    def histogram_max(self) -> int:
        return self._histogram_max

    @property
    def counts(self) -> np.ndarray:
        """Copy of the counts for values 0..histogram_max."""
        return self._histogram[: self._histogram_max + 1].copy()

    @property
    def capacity(self) -> int:
        return int(self._histogram.size)

    def write_histogram(self, fh: TextIO, label: str) -> None:
        """Write the dense two-column text dump of the counts to `fh`."""
        write_histogram(self, fh, label)

    def __repr__(self) -> str:
        return (f"HistogramStatistics(histogram_max={self._histogram_max}, "
                f"capacity={self._histogram.size})")
