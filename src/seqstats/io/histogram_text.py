"""Text dump of histogram counts.

The format is read by downstream tooling and must not change:

    #<label>\tquantity
    0\t<count of 0>
    1\t<count of 1>
    ...

one line per value from 0 through the largest value added, zero counts
included.
"""

from __future__ import annotations

import io
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from ..estimators.histogram_stats import HistogramStatistics


def write_histogram(histogram: "HistogramStatistics", fh: TextIO, label: str) -> None:
    """Write the dense two-column dump of `histogram` to `fh`.

    Parameters
    ----------
    histogram : HistogramStatistics
        Histogram to dump.
    fh : file-like
        Open text stream.
    label : str
        Name of the first column.
    """
    fh.write(f"#{label}\tquantity\n")
    for value, count in enumerate(histogram.counts.tolist()):
        fh.write(f"{value}\t{count}\n")


def format_histogram(histogram: "HistogramStatistics", label: str) -> str:
    """Return the text `write_histogram` would produce."""
    buf = io.StringIO()
    write_histogram(histogram, buf, label)
    return buf.getvalue()


__all__ = ["write_histogram", "format_histogram"]
