"""Online statistics using Welford's algorithm.

Provides numerically stable computation of a running mean and variance
for a stream of scalar measurements, with support for retracting a value
that was previously inserted.

B. P. Welford, Technometrics, Vol 4, No 3, Aug 1962 pp 419-420.
Also presented in Knuth Vol 2 (3rd Ed.) pp 232.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Tuple

from ..constants import MAX_ACCUMULATOR_COUNT
from ..errors import (
    AccumulatorEmptyError,
    AccumulatorFinalizedError,
    AccumulatorFullError,
)

logger = logging.getLogger(__name__)


class OnlineAccumulator:
    """Numerically stable running mean/variance using Welford's method.

    Use `insert(x)` per observation and `remove(x)` to retract an
    observation that was inserted earlier. `finalize()` freezes the
    accumulator: the sum of squared deviations is replaced by the standard
    deviation and no further insert/remove is accepted.

    Parameters
    ----------
    mean : float
        Initial running mean, for resuming a saved state.
    sum_sq : float
        Initial sum of squared deviations from the mean.
    count : int
        Initial number of values.

    Attributes
    ----------
    size : int
        Number of values seen.
    mean : float
        Running mean estimate.
    variance : float
        Sample variance (n-1 denominator), or stddev**2 once finalized.
    stddev : float
        Sample standard deviation.
    """

    def __init__(self, mean: float = 0.0, sum_sq: float = 0.0, count: int = 0):
        if count < 0 or count > MAX_ACCUMULATOR_COUNT:
            raise ValueError(
                f"count must be in [0, {MAX_ACCUMULATOR_COUNT}], got {count}"
            )
        self._mean = float(mean)
        self._M2 = float(sum_sq)
        self._n = int(count)
        self._finalized = False

    def insert(self, x: float) -> None:
        """Update statistics with a single observation.

        Parameters
        ----------
        x : float
            New observation.

        Raises
        ------
        AccumulatorFinalizedError
            If `finalize()` was already called.
        AccumulatorFullError
            If the accumulator already holds MAX_ACCUMULATOR_COUNT values.
        """
        if self._finalized:
            raise AccumulatorFinalizedError(
                "accumulator has been finalized; can't insert() new value"
            )
        if self._n == MAX_ACCUMULATOR_COUNT:
            raise AccumulatorFullError(
                "accumulator is full; can't insert() new value"
            )

        n = self._n + 1
        delta = x - self._mean
        self._mean += delta / n
        self._M2 += delta * (x - self._mean)
        self._n = n

    def insert_many(self, xs: Iterable[float]) -> None:
        """Insert every value of `xs` in order."""
        for x in xs:
            self.insert(x)

    def remove(self, x: float) -> None:
        """Retract an observation previously passed to `insert()`.

        This is the algebraic inverse of `insert()`, not a lookup: removing
        a value that was never inserted silently corrupts the statistics.

        Raises
        ------
        AccumulatorFinalizedError
            If `finalize()` was already called.
        AccumulatorEmptyError
            If there is nothing to remove.
        """
        if self._finalized:
            raise AccumulatorFinalizedError(
                "accumulator has been finalized; can't remove() old value"
            )
        if self._n == 0:
            raise AccumulatorEmptyError(
                "accumulator has no data; can't remove() old value"
            )

        n = self._n - 1
        prev_mean = 0.0 if n == 0 else (self._n * self._mean - x) / n
        self._M2 -= (x - prev_mean) * (x - self._mean)
        self._mean = prev_mean
        self._n = n

    def finalize(self) -> None:
        """Freeze the accumulator, keeping the standard deviation.

        Calling it again has no effect.
        """
        if self._finalized:
            logger.debug("accumulator already finalized (n=%d)", self._n)
            return
        self._M2 = self.stddev
        self._finalized = True

    @property
    def is_finalized(self) -> bool:
        return self._finalized

    @property
    def size(self) -> int:
        return self._n

    @property
    def mean(self) -> float:
        return self._mean

    @property
    def variance(self) -> float:
        """Sample variance estimate.

        Returns
        -------
        float
            M2 / (n-1), 0.0 with fewer than two values. Once finalized this
            is the square of the frozen standard deviation.
        """
        if self._finalized:
            return self._M2 * self._M2
        if self._n < 2:
            return 0.0
        return self._M2 / (self._n - 1)

    @property
    def stddev(self) -> float:
        """Sample standard deviation estimate."""
        if self._finalized:
            return self._M2
        return math.sqrt(self.variance)

    def state(self) -> Tuple[float, float, int]:
        """Return the (mean, sum_sq, count) triple accepted by the constructor.

        Raises
        ------
        AccumulatorFinalizedError
            If the accumulator was finalized; its sum of squares is gone.
        """
        if self._finalized:
            raise AccumulatorFinalizedError(
                "accumulator has been finalized; its state can't be resumed"
            )
        return self._mean, self._M2, self._n

    def reset(self) -> None:
        """Reset all statistics to the empty, non-finalized state."""
        self._mean = 0.0
        self._M2 = 0.0
        self._n = 0
        self._finalized = False

    def __repr__(self) -> str:
        return (f"OnlineAccumulator(n={self._n}, "
                f"mean={self._mean}, std={self.stddev}, "
                f"finalized={self._finalized})")
