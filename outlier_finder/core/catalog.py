"""Registry of the outlier detection methods.

The catalog order is part of the report contract: reports list one result per
method in exactly this order.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from functools import partial

from outlier_finder.core.dataset import ColumnEntry
from outlier_finder.core.detectors import (
    find_outliers_dixon_q,
    find_outliers_esd,
    find_outliers_grubbs,
    find_outliers_iqr,
    find_outliers_modified_zscore,
    find_outliers_peirce,
    find_outliers_zscore,
)
from outlier_finder.core.thresholds import DetectionThresholds

Detector = Callable[[Sequence[ColumnEntry]], list[int]]


@dataclass(frozen=True)
class DetectionMethod:
    """A detection algorithm with its display metadata.

    Attributes:
        key: Stable identifier (e.g., "iqr")
        name: Display name
        description: One-sentence summary of the method
        fn: Detector mapping a column to flagged row indices
    """

    key: str
    name: str
    description: str
    fn: Detector


def build_catalog(thresholds: DetectionThresholds | None = None) -> tuple[DetectionMethod, ...]:
    """Build the ordered method catalog with the given thresholds bound in.

    Args:
        thresholds: Detection thresholds (None = documented defaults)

    Returns:
        The seven methods in report order
    """
    t = thresholds or DetectionThresholds()
    return (
        DetectionMethod(
            key="iqr",
            name="Interquartile Range (IQR)",
            description="Identifies outliers based on the spread of the middle 50% of the data.",
            fn=partial(find_outliers_iqr, multiplier=t.iqr_multiplier),
        ),
        DetectionMethod(
            key="zscore",
            name="Z-Score Method",
            description=(
                "Flags data points that deviate significantly from the mean "
                "(typically > 3 standard deviations)."
            ),
            fn=partial(find_outliers_zscore, threshold=t.zscore_threshold),
        ),
        DetectionMethod(
            key="modified_zscore",
            name="Modified Z-Score Method",
            description=(
                "A robust version of Z-score using median and median absolute "
                "deviation, less sensitive to existing outliers."
            ),
            fn=partial(find_outliers_modified_zscore, threshold=t.modified_zscore_threshold),
        ),
        DetectionMethod(
            key="grubbs",
            name="Grubbs' Test",
            description=(
                "A statistical test to detect a single outlier in a normally "
                "distributed univariate dataset. (Simplified)"
            ),
            fn=partial(find_outliers_grubbs, critical_value=t.grubbs_critical_value),
        ),
        DetectionMethod(
            key="esd",
            name="Generalized ESD Test",
            description=(
                "An iterative test to detect multiple outliers in a normally "
                "distributed dataset. (Simplified)"
            ),
            fn=partial(
                find_outliers_esd,
                critical_value=t.esd_critical_value,
                max_outlier_fraction=t.esd_max_outlier_fraction,
            ),
        ),
        DetectionMethod(
            key="dixon_q",
            name="Dixon's Q Test",
            description="A test for single outliers in small datasets (n<30). (Simplified)",
            fn=find_outliers_dixon_q,
        ),
        DetectionMethod(
            key="peirce",
            name="Peirce's Criterion",
            description="An early, rigorous method for outlier rejection. (Conceptual proxy used)",
            fn=partial(find_outliers_peirce, threshold=t.peirce_threshold),
        ),
    )


DEFAULT_CATALOG: tuple[DetectionMethod, ...] = build_catalog()


def get_method_names(catalog: Sequence[DetectionMethod] = DEFAULT_CATALOG) -> list[str]:
    """Get display names in report order.

    Returns:
        List of method name strings
    """
    return [method.name for method in catalog]


def get_method(key: str, catalog: Sequence[DetectionMethod] = DEFAULT_CATALOG) -> DetectionMethod:
    """Look up a method by its key.

    Raises:
        KeyError: If no method has that key
    """
    for method in catalog:
        if method.key == key:
            return method
    raise KeyError(f"Unknown detection method: {key!r}")
