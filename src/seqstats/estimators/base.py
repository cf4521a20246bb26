"""Common read surface of the batch statistics providers."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Protocol, Union, runtime_checkable

Number = Union[int, float]


@runtime_checkable
class DescriptiveStatistics(Protocol):
    """Anything exposing mean/stddev/mode/median/MAD over a sample.

    Implemented independently by `SampleStatistics` (raw values) and
    `HistogramStatistics` (per-value counts).
    """

    @property
    def number_of_objects(self) -> int: ...

    @property
    def mean(self) -> float: ...

    @property
    def stddev(self) -> float: ...

    @property
    def mode(self) -> Number: ...

    @property
    def median(self) -> Number: ...

    @property
    def mad(self) -> Number: ...


@dataclass(frozen=True)
class StatisticsSummary:
    """Snapshot of a provider's aggregates."""

    number_of_objects: int
    mean: float
    stddev: float
    mode: Number
    median: Number
    mad: Number

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def summarize(stats: DescriptiveStatistics) -> StatisticsSummary:
    """Read every aggregate of `stats` into a `StatisticsSummary`."""
    return StatisticsSummary(
        number_of_objects=stats.number_of_objects,
        mean=stats.mean,
        stddev=stats.stddev,
        mode=stats.mode,
        median=stats.median,
        mad=stats.mad,
    )
