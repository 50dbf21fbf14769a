"""Descriptive statistics used by the detection algorithms.

Quartiles and medians use nearest-rank indexing (``sorted[floor(p * n)]``)
rather than interpolated percentiles, and the standard deviation is the
population one (divisor ``n``). Detection thresholds are tuned to these
definitions, so swapping in ``np.percentile`` or ``ddof=1`` changes results.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np


@dataclass(frozen=True)
class Statistics:
    """Summary statistics for one sample.

    Attributes:
        q1: Nearest-rank first quartile
        q3: Nearest-rank third quartile
        iqr: Interquartile range (q3 - q1)
        mean: Arithmetic mean
        std_dev: Population standard deviation
        median: Nearest-rank median
        mad: Nearest-rank median of absolute deviations from the median
    """

    q1: float = 0.0
    q3: float = 0.0
    iqr: float = 0.0
    mean: float = 0.0
    std_dev: float = 0.0
    median: float = 0.0
    mad: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "q1": self.q1,
            "q3": self.q3,
            "iqr": self.iqr,
            "mean": self.mean,
            "std_dev": self.std_dev,
            "median": self.median,
            "mad": self.mad,
        }


def nearest_rank(sorted_values: np.ndarray, fraction: float) -> float:
    """Value at position ``floor(fraction * n)`` of an ascending array."""
    return float(sorted_values[int(np.floor(len(sorted_values) * fraction))])


def compute_statistics(sample: Sequence[float] | np.ndarray) -> Statistics:
    """Compute nearest-rank quartiles, mean, population std and MAD.

    Args:
        sample: Numeric values in any order

    Returns:
        Statistics for the sample; all zeros for an empty sample

    Example:
        >>> stats = compute_statistics([1.0, 2.0, 3.0, 4.0])
        >>> stats.q1, stats.median, stats.q3
        (2.0, 3.0, 4.0)
    """
    values = np.asarray(sample, dtype=float)
    if values.size == 0:
        return Statistics()

    ordered = np.sort(values)
    q1 = nearest_rank(ordered, 0.25)
    median = nearest_rank(ordered, 0.5)
    q3 = nearest_rank(ordered, 0.75)

    residuals = np.sort(np.abs(values - median))

    return Statistics(
        q1=q1,
        q3=q3,
        iqr=q3 - q1,
        mean=float(np.mean(values)),
        std_dev=float(np.std(values)),
        median=median,
        mad=nearest_rank(residuals, 0.5),
    )
