#!/usr/bin/env python3
"""Example: summarizing simulated read lengths and coverage depths.

This script demonstrates the three ways seqstats summarizes a pipeline's
measurements: streaming, raw-sample batch and histogram batch.
"""

import logging
import sys

import numpy as np
from seqstats import (
    HistogramStatistics,
    OnlineAccumulator,
    SampleStatistics,
    StatisticsError,
    exponential_moving_averages,
    summarize,
)


def simulate_read_lengths(n_reads=5000, seed=42):
    """Read lengths around 10kb with a few chimeric giants."""
    rng = np.random.default_rng(seed)
    lengths = rng.normal(10000, 1500, size=n_reads).clip(min=500).astype(int)
    lengths[rng.choice(n_reads, size=10, replace=False)] = 250000
    return lengths


def simulate_coverage(n_positions=200000, depth=30, seed=42):
    """Per-base coverage depths, Poisson around `depth`."""
    rng = np.random.default_rng(seed)
    return rng.poisson(depth, size=n_positions)


def example_streaming(lengths):
    """Running mean/stddev, retracting reads that fail a later filter."""
    print("=== Streaming Accumulation ===")

    acc = OnlineAccumulator()
    acc.insert_many(lengths)
    print(f"All reads:      n={acc.size}  mean={acc.mean:.1f}  std={acc.stddev:.1f}")

    for length in lengths[lengths > 100000]:
        acc.remove(length)
    acc.finalize()
    print(f"Filtered reads: n={acc.size}  mean={acc.mean:.1f}  std={acc.stddev:.1f}")

    try:
        acc.insert(9000)
    except StatisticsError as err:
        print(f"Rejected insert after finalize: {err}")


def example_sample_statistics(lengths):
    """Outlier-trimmed statistics over the raw read lengths."""
    print("\n=== Raw Sample Statistics ===")

    stats = SampleStatistics()
    stats.add_many(lengths.tolist())

    print(f"Naive mean:   {lengths.mean():.1f}")
    print(f"Trimmed mean: {stats.mean:.1f}")
    print(summarize(stats))


def example_histogram(coverage):
    """Depth histogram for a large number of positions."""
    print("\n=== Histogram Statistics ===")

    hist = HistogramStatistics(initial_capacity=16)
    for depth, count in enumerate(np.bincount(coverage)):
        hist.add(depth, count=int(count))

    print(f"Capacity grew to {hist.capacity} slots (max depth {hist.histogram_max})")
    print(summarize(hist))

    smoothed = exponential_moving_averages(hist.counts, alpha=0.3)
    print(f"Smoothed count at the mode: {smoothed[hist.mode]:.1f}")

    print("\nDepth dump:")
    hist.write_histogram(sys.stdout, "depth")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    lengths = simulate_read_lengths()
    example_streaming(lengths)
    example_sample_statistics(lengths)
    example_histogram(simulate_coverage())
