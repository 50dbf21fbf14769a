"""Outlier detection algorithms.

Each detector takes one column as a sequence of ``ColumnEntry`` (value plus
original row index) and returns the flagged row indices, in detection order
and without duplicates. Detectors are pure: degenerate columns (zero spread,
too few samples) yield an empty list instead of raising.

Several tests are simplified: Grubbs and generalized ESD compare against
fixed critical values, and Peirce's criterion is approximated by a modified
Z-score with a wider threshold.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

from outlier_finder.core.dataset import ColumnEntry
from outlier_finder.core.statistics import compute_statistics
from outlier_finder.core.thresholds import (
    DIXON_MAX_SAMPLES,
    DIXON_MIN_SAMPLES,
    ESD_CRITICAL_VALUE,
    ESD_MAX_OUTLIER_FRACTION,
    GRUBBS_CRITICAL_VALUE,
    IQR_MULTIPLIER,
    MODIFIED_ZSCORE_CONSTANT,
    MODIFIED_ZSCORE_THRESHOLD,
    PEIRCE_THRESHOLD,
    ZSCORE_THRESHOLD,
    dixon_critical_value,
)

GRUBBS_MIN_SAMPLES = 3
ESD_MIN_SAMPLES = 5
ESD_MIN_REMAINING = 3


def _values(column: Sequence[ColumnEntry]) -> np.ndarray:
    return np.fromiter((entry.value for entry in column), dtype=float, count=len(column))


def iqr_bounds(
    column: Sequence[ColumnEntry],
    multiplier: float = IQR_MULTIPLIER,
) -> tuple[float, float]:
    """Lower and upper fences ``q1 - k*iqr`` and ``q3 + k*iqr``."""
    stats = compute_statistics(_values(column))
    return stats.q1 - multiplier * stats.iqr, stats.q3 + multiplier * stats.iqr


def find_outliers_iqr(
    column: Sequence[ColumnEntry],
    multiplier: float = IQR_MULTIPLIER,
) -> list[int]:
    """Flag values outside the Tukey fences.

    Args:
        column: Values with their original row indices
        multiplier: Fence width in IQRs (1.5 for Tukey's inner fences)

    Returns:
        Indices of values below ``q1 - k*iqr`` or above ``q3 + k*iqr``
    """
    lower, upper = iqr_bounds(column, multiplier)
    return [entry.index for entry in column if entry.value < lower or entry.value > upper]


def find_outliers_zscore(
    column: Sequence[ColumnEntry],
    threshold: float = ZSCORE_THRESHOLD,
) -> list[int]:
    """Flag values more than ``threshold`` population standard deviations from the mean."""
    stats = compute_statistics(_values(column))
    if stats.std_dev == 0:
        return []
    return [
        entry.index
        for entry in column
        if abs((entry.value - stats.mean) / stats.std_dev) > threshold
    ]


def find_outliers_modified_zscore(
    column: Sequence[ColumnEntry],
    threshold: float = MODIFIED_ZSCORE_THRESHOLD,
) -> list[int]:
    """Flag values whose modified Z-score exceeds ``threshold``.

    The modified Z-score is ``0.6745 * (x - median) / MAD`` (Iglewicz and
    Hoaglin). A zero MAD means more than half the column is identical, and
    nothing is flagged.
    """
    stats = compute_statistics(_values(column))
    if stats.mad == 0:
        return []
    return [
        entry.index
        for entry in column
        if abs(MODIFIED_ZSCORE_CONSTANT * (entry.value - stats.median) / stats.mad)
        > threshold
    ]


def find_outliers_peirce(
    column: Sequence[ColumnEntry],
    threshold: float = PEIRCE_THRESHOLD,
) -> list[int]:
    """Approximate Peirce's criterion with a modified Z-score cutoff of 4.0.

    This is a proxy, not Peirce's iterative rejection ratio.
    """
    return find_outliers_modified_zscore(column, threshold=threshold)


def find_outliers_grubbs(
    column: Sequence[ColumnEntry],
    critical_value: float = GRUBBS_CRITICAL_VALUE,
) -> list[int]:
    """Single-outlier Grubbs test against a fixed critical value.

    Finds the value with the largest ``|x - mean| / std`` and flags it if that
    statistic exceeds ``critical_value``. The critical value does not depend
    on the sample size.
    """
    if len(column) < GRUBBS_MIN_SAMPLES:
        return []
    stats = compute_statistics(_values(column))
    if stats.std_dev == 0:
        return []

    max_deviation = 0.0
    candidate: int | None = None
    for entry in column:
        deviation = abs(entry.value - stats.mean) / stats.std_dev
        if deviation > max_deviation:
            max_deviation = deviation
            candidate = entry.index

    if candidate is not None and max_deviation > critical_value:
        return [candidate]
    return []


def find_outliers_esd(
    column: Sequence[ColumnEntry],
    critical_value: float = ESD_CRITICAL_VALUE,
    max_outlier_fraction: float = ESD_MAX_OUTLIER_FRACTION,
) -> list[int]:
    """Generalized ESD test by iterative removal of the most deviant value.

    Runs at most ``floor(n * max_outlier_fraction)`` rounds. Each round
    recomputes the mean and standard deviation of the values still in play,
    removes the most deviant one if its deviation exceeds ``critical_value``
    and stops otherwise. Stops early once fewer than 3 values remain or the
    remaining values have no spread.

    Returns:
        Flagged indices in removal order
    """
    if len(column) < ESD_MIN_SAMPLES:
        return []

    max_outliers = math.floor(len(column) * max_outlier_fraction)
    remaining = list(column)
    outliers: list[int] = []

    for _ in range(max_outliers):
        if len(remaining) < ESD_MIN_REMAINING:
            break
        stats = compute_statistics(_values(remaining))
        if stats.std_dev == 0:
            break

        max_deviation = -1.0
        position = -1
        for i, entry in enumerate(remaining):
            deviation = abs(entry.value - stats.mean) / stats.std_dev
            if deviation > max_deviation:
                max_deviation = deviation
                position = i

        if position == -1 or max_deviation <= critical_value:
            break
        outliers.append(remaining.pop(position).index)

    return outliers


def find_outliers_dixon_q(column: Sequence[ColumnEntry]) -> list[int]:
    """Dixon's Q test for the smallest and largest value of a small sample.

    Only applies to columns with 3 to 30 values. The gap between each extreme
    and its neighbour, divided by the range, is compared to the tabulated
    critical Q for the sample size. Both extremes may be flagged.
    """
    n = len(column)
    if n < DIXON_MIN_SAMPLES or n > DIXON_MAX_SAMPLES:
        return []

    ordered = sorted(column, key=lambda entry: entry.value)
    value_range = ordered[-1].value - ordered[0].value
    if value_range == 0:
        return []

    q_crit = dixon_critical_value(n)
    q_low = (ordered[1].value - ordered[0].value) / value_range
    q_high = (ordered[-1].value - ordered[-2].value) / value_range

    outliers: list[int] = []
    if q_low > q_crit:
        outliers.append(ordered[0].index)
    if q_high > q_crit:
        outliers.append(ordered[-1].index)
    return outliers
