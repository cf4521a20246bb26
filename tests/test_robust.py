"""Tests for the robust batch estimators."""

import numpy as np
import pytest
from scipy import stats
from seqstats.errors import InvalidWeightError
from seqstats.estimators.robust import (
    exponential_moving_average,
    exponential_moving_averages,
    median_absolute_deviation,
    mode,
    trimmed_mean_stddev,
)


class TestTrimmedMeanStddev:
    """Test cases for trimmed_mean_stddev."""

    def test_clean_sample_matches_naive(self):
        """Without outliers the trimmed statistics are the plain ones."""
        x = np.arange(1, 31, dtype=float)

        mean, stddev = trimmed_mean_stddev(x)

        assert mean == pytest.approx(x.mean())
        assert stddev == pytest.approx(x.std(ddof=1))

    def test_outlier_rejected(self):
        """A far outlier barely moves the trimmed statistics."""
        clean = np.arange(1, 31, dtype=float)
        dirty = np.append(clean, 10000.0)

        clean_mean, clean_std = trimmed_mean_stddev(clean)
        dirty_mean, dirty_std = trimmed_mean_stddev(dirty)

        assert abs(dirty_mean - clean_mean) < 1e-9
        assert abs(dirty_std - clean_std) < 1e-9

        # The naive statistics shift a lot
        assert dirty.mean() - clean.mean() > 100.0
        assert dirty.std(ddof=1) > 10 * clean.std(ddof=1)

    def test_bounds_are_inclusive(self):
        """Values exactly at median +/- 5 approx std are kept."""
        # median 10, thirds 10 and 11, approx_std 1, bounds [5, 15]
        x = [5, 9, 9, 10, 10, 10, 11, 11, 15]

        mean, _ = trimmed_mean_stddev(x)

        assert mean == pytest.approx(np.mean(x))

    def test_empty(self):
        """Empty samples give zeros."""
        assert trimmed_mean_stddev([]) == (0.0, 0.0)

    def test_single_value(self):
        """A single value has no spread."""
        assert trimmed_mean_stddev([7]) == (7.0, 0.0)

    def test_presorted(self):
        """The is_sorted flag skips sorting without changing results."""
        x = np.sort(np.random.default_rng(3).normal(100.0, 5.0, size=200))

        assert trimmed_mean_stddev(x, is_sorted=True) == trimmed_mean_stddev(x[::-1])

    def test_unsigned_input(self):
        """Unsigned samples do not wrap around in the bounds."""
        x = np.array([2, 3, 3, 4, 200], dtype=np.uint16)

        mean, stddev = trimmed_mean_stddev(x)

        assert mean == pytest.approx(3.0)
        assert stddev == pytest.approx(np.std([2, 3, 3, 4], ddof=1))

    def test_caller_sequence_untouched(self):
        """The input is not sorted in place."""
        x = np.array([5.0, 1.0, 3.0])
        trimmed_mean_stddev(x)
        np.testing.assert_array_equal(x, [5.0, 1.0, 3.0])


class TestMode:
    """Test cases for mode."""

    def test_tie_prefers_smallest(self):
        """Equally frequent values resolve to the smallest."""
        assert mode([3, 3, 1, 1]) == 1

    def test_trailing_run(self):
        """The last run can be the mode."""
        assert mode([1, 2, 2, 2]) == 2
        assert mode([4, 9, 9, 1, 9]) == 9

    def test_trailing_tie(self):
        """A trailing run tied with an earlier one does not win."""
        assert mode([1, 1, 5, 5]) == 1

    def test_single_and_empty(self):
        """Test degenerate samples."""
        assert mode([5]) == 5
        assert mode([]) == 0

    def test_keeps_element_type(self):
        """Integer input gives an int, float input a float."""
        assert isinstance(mode([2, 2, 3]), int)
        assert mode([0.5, 0.25, 0.5]) == 0.5

    def test_matches_scipy(self):
        """Compare against scipy.stats.mode, which also picks the smallest."""
        x = np.random.default_rng(11).integers(0, 20, size=500)

        expected = stats.mode(x, keepdims=False).mode

        assert mode(x) == expected


class TestMedianAbsoluteDeviation:
    """Test cases for median_absolute_deviation."""

    def test_known_values(self):
        """Deviations [2,1,0,1,2] sort to [0,1,1,2,2]."""
        assert median_absolute_deviation([1, 2, 3, 4, 5]) == (3, 1)

    def test_unsorted_input(self):
        """Test that unsorted input is sorted first."""
        assert median_absolute_deviation([5, 1, 4, 2, 3]) == (3, 1)

    def test_even_size_uses_index(self):
        """Even sizes take the element at n // 2, no averaging."""
        median, mad = median_absolute_deviation([1, 2, 3, 4])

        assert median == 3
        assert mad == 1

    def test_unsigned_input(self):
        """Deviations of unsigned values do not wrap."""
        x = np.array([1, 5, 9], dtype=np.uint8)

        assert median_absolute_deviation(x) == (5, 4)

    def test_empty(self):
        """Empty samples give zeros."""
        assert median_absolute_deviation([]) == (0, 0)

    def test_integers_beyond_int64(self):
        """Python ints too large for int64 come back as plain ints."""
        x = [2**64, 2**64, 1]

        assert mode(x) == 2**64
        assert median_absolute_deviation(x) == (2**64, 0)
        assert isinstance(mode(x), int)

    def test_matches_scipy_odd_size(self):
        """For odd sizes the result equals the textbook MAD."""
        x = np.random.default_rng(5).integers(0, 1000, size=101)

        median, mad = median_absolute_deviation(x)

        assert median == np.median(x)
        assert mad == stats.median_abs_deviation(x)


class TestExponentialMovingAverage:
    """Test cases for the exponential moving average helpers."""

    def test_step(self):
        """Test single steps, including the extreme weights."""
        assert exponential_moving_average(0.5, 10.0, 20.0) == 15.0
        assert exponential_moving_average(0.0, 10.0, 20.0) == 10.0
        assert exponential_moving_average(1.0, 10.0, 20.0) == 20.0

    @pytest.mark.parametrize("alpha", [-0.1, 1.1, float("nan")])
    def test_invalid_weight(self, alpha):
        """Weights outside [0, 1] are rejected."""
        with pytest.raises(InvalidWeightError):
            exponential_moving_average(alpha, 0.0, 1.0)
        with pytest.raises(InvalidWeightError):
            exponential_moving_averages([1.0, 2.0], alpha)

    def test_series(self):
        """The running series matches repeated single steps."""
        values = [1.0, 1.0, 1.0]

        out = exponential_moving_averages(values, 0.5)

        np.testing.assert_allclose(out, [0.5, 0.75, 0.875])

    def test_series_initial(self):
        """The series starts from the given initial average."""
        ema = 4.0
        values = np.array([2.0, 8.0, 5.0, 1.0])
        expected = []
        for v in values:
            ema = exponential_moving_average(0.3, ema, v)
            expected.append(ema)

        np.testing.assert_allclose(exponential_moving_averages(values, 0.3, initial=4.0), expected)
