"""Descriptive statistics over a collection of raw samples.

Aggregates are computed lazily: adding a value only marks the cached
results stale, and the next read recomputes all of them from scratch.
"""

from __future__ import annotations

import logging
import math
import warnings
from typing import Iterable, List

import numpy as np

from .base import Number
from .robust import median_absolute_deviation, mode, trimmed_mean_stddev

logger = logging.getLogger(__name__)


class SampleStatistics:
    """Raw-sample statistics with outlier-trimmed mean/stddev.

    Usage:
        stats = SampleStatistics()
        for length in read_lengths:
            stats.add(length)
        print(stats.mean, stats.median, stats.mad)

    Attributes
    ----------
    number_of_objects : int
        Number of samples added.
    mean, stddev : float
        Outlier-trimmed mean and standard deviation.
    mode : int or float
        Most frequent value, smallest on ties.
    median, mad : int or float
        Median (element at n // 2 of the sorted sample) and median
        absolute deviation.
    """

    def __init__(self):
        self._data: List[Number] = []
        self._finalized = False
        self._clear_statistics()

    def _clear_statistics(self) -> None:
        self._mean = 0.0
        self._stddev = 0.0
        self._mode: Number = 0
        self._median: Number = 0
        self._mad: Number = 0

    def add(self, value: Number) -> None:
        """Append a sample and invalidate the cached aggregates."""
        if isinstance(value, float) and not math.isfinite(value):
            warnings.warn(
                f"Non-finite sample {value} added; aggregates may be meaningless",
                RuntimeWarning,
            )
        self._data.append(value)
        self._finalized = False

    def add_many(self, values: Iterable[Number]) -> None:
        """Append every value of `values`."""
        for value in values:
            self.add(value)

    def finalize_data(self) -> None:
        """Recompute the aggregates if samples were added since the last read."""
        if self._finalized:
            return

        dist = np.sort(np.asarray(self._data))
        logger.debug("recomputing sample statistics over %d values", dist.size)

        self._clear_statistics()
        self._mean, self._stddev = trimmed_mean_stddev(dist, is_sorted=True)
        self._mode = mode(dist, is_sorted=True)
        self._median, self._mad = median_absolute_deviation(dist, is_sorted=True)

        self._finalized = True

    @property
    def number_of_objects(self) -> int:
        return len(self._data)

    @property
    def mean(self) -> float:
        self.finalize_data()
        return self._mean

    @property
    def stddev(self) -> float:
        self.finalize_data()
        return self._stddev

    @property
    def mode(self) -> Number:
        self.finalize_data()
        return self._mode

    @property
    def median(self) -> Number:
        self.finalize_data()
        return self._median

    @property
    def mad(self) -> Number:
        """Median absolute deviation."""
        self.finalize_data()
        return self._mad

    @property
    def values(self) -> np.ndarray:
        """Copy of the stored samples, in insertion order."""
        return np.array(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"SampleStatistics(n_samples={len(self._data)})"
