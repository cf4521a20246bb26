"""Robust batch estimators over a finite sample.

Every function works on a private sorted copy of the values, so the
caller's sequence is left alone. Pass ``is_sorted=True`` to skip the sort
when the values are already in ascending order. Empty samples are valid
and produce zeros.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence, Tuple, Union

import numpy as np

from ..constants import OUTLIER_SPREAD
from ..errors import InvalidWeightError
from .base import Number

logger = logging.getLogger(__name__)

ArrayLike = Union[np.ndarray, Sequence[Number]]


def _scalar(x):
    # Object arrays (ints past int64) hold plain Python numbers
    return x.item() if isinstance(x, np.generic) else x


def _as_sorted(values: ArrayLike, is_sorted: bool) -> np.ndarray:
    arr = np.asarray(values)
    if arr.ndim != 1:
        arr = arr.ravel()
    if is_sorted:
        return arr
    return np.sort(arr)


def trimmed_mean_stddev(values: ArrayLike, is_sorted: bool = False) -> Tuple[float, float]:
    """Mean and standard deviation after discarding outliers.

    The spread is approximated from the values at one and two thirds of the
    sorted sample (roughly one standard deviation either side of the median
    for normal data). Values farther than ``OUTLIER_SPREAD`` approximate
    standard deviations from the median are ignored.

    Parameters
    ----------
    values : array_like
        Sample values.
    is_sorted : bool
        Whether `values` is already sorted ascending.

    Returns
    -------
    tuple of float
        (mean, stddev) of the in-bound values. Stddev uses the n-1
        denominator. Both are 0.0 when nothing is in bounds, stddev is 0.0
        when only one value is.
    """
    dist = _as_sorted(values, is_sorted)
    n = dist.size
    if n == 0:
        return 0.0, 0.0

    median = dist[n // 2]
    one_third = dist[n // 3]
    two_third = dist[2 * n // 3]

    # Signed arithmetic, unsigned samples would wrap around
    approx_std = max(float(median) - float(one_third), float(two_third) - float(median))
    smallest = float(median) - approx_std * OUTLIER_SPREAD
    biggest = float(median) + approx_std * OUTLIER_SPREAD

    logger.debug(
        "trimmed bounds: median=%s one_third=%s two_third=%s approx_std=%s range=[%s, %s]",
        median, one_third, two_third, approx_std, smallest, biggest,
    )

    kept = dist[(smallest <= dist) & (dist <= biggest)].astype(float)
    if kept.size == 0:
        return 0.0, 0.0

    mean = float(kept.mean())
    if kept.size < 2:
        return mean, 0.0
    stddev = math.sqrt(float(np.sum((kept - mean) ** 2)) / (kept.size - 1))
    return mean, stddev


def mode(values: ArrayLike, is_sorted: bool = False) -> Number:
    """Most frequent value of the sample.

    Runs of equal values in the sorted sample are compared with a strict
    greater-than, so among equally frequent values the smallest wins.

    Returns
    -------
    int or float
        The mode, with the element type of the input. 0 for an empty sample.
    """
    dist = _as_sorted(values, is_sorted)
    if dist.size == 0:
        return 0

    starts = np.concatenate(([0], np.flatnonzero(dist[1:] != dist[:-1]) + 1))
    lengths = np.diff(np.append(starts, dist.size))

    # argmax picks the first longest run
    return _scalar(dist[starts[int(np.argmax(lengths))]])


def median_absolute_deviation(values: ArrayLike, is_sorted: bool = False) -> Tuple[Number, Number]:
    """Median and median absolute deviation of the sample.

    The median is the element at index ``n // 2`` of the sorted sample. For
    an even number of values the two central values are not averaged; the
    one at ``n // 2`` is used. The MAD is taken from the sorted absolute
    deviations with the same rule.

    Returns
    -------
    tuple
        (median, mad) with the element type of the input, (0, 0) when empty.
    """
    dist = _as_sorted(values, is_sorted)
    n = dist.size
    if n == 0:
        return 0, 0

    median = dist[n // 2]
    deviations = np.sort(np.where(dist < median, median - dist, dist - median))
    return _scalar(median), _scalar(deviations[n // 2])


def _check_weight(alpha: float) -> None:
    if not (0.0 <= alpha <= 1.0):
        raise InvalidWeightError(f"alpha must be in [0, 1], got {alpha}")


def exponential_moving_average(alpha: float, ema: float, value: float) -> float:
    """One exponential moving average step.

    Parameters
    ----------
    alpha : float
        Weight of the new value, in [0, 1].
    ema : float
        Current average.
    value : float
        New observation.

    Returns
    -------
    float
        alpha * value + (1 - alpha) * ema.

    Raises
    ------
    InvalidWeightError
        If alpha is outside [0, 1] or NaN.
    """
    _check_weight(alpha)
    return alpha * value + (1 - alpha) * ema


def exponential_moving_averages(values: ArrayLike, alpha: float, initial: float = 0.0) -> np.ndarray:
    """Running exponential moving average over a sequence.

    Returns
    -------
    np.ndarray
        The average after each value, same length as `values`.
    """
    _check_weight(alpha)
    xs = np.asarray(values, dtype=float).ravel()
    out = np.empty_like(xs)
    ema = float(initial)
    for i, x in enumerate(xs):
        ema = alpha * x + (1 - alpha) * ema
        out[i] = ema
    return out


__all__ = [
    "trimmed_mean_stddev",
    "mode",
    "median_absolute_deviation",
    "exponential_moving_average",
    "exponential_moving_averages",
]
