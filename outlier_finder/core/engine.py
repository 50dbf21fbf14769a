"""Run every detection method over every column of a dataset.

Example:
    >>> from outlier_finder.core.dataset import DataPoint, DataSet
    >>> ds = DataSet(
    ...     dimensions=1,
    ...     headers=("x",),
    ...     data=[DataPoint(index=i, values=(v,)) for i, v in enumerate([10, 12, 11, 13, 12, 100])],
    ... )
    >>> report = run_all_analyses(ds)
    >>> [len(r.outliers) for r in report][:2]
    [1, 0]
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from outlier_finder.core.catalog import DetectionMethod, build_catalog
from outlier_finder.core.dataset import DataSet
from outlier_finder.core.thresholds import DetectionThresholds
from outlier_finder.exceptions import DatasetShapeError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OutlierRecord:
    """A row flagged in one column by one method.

    Attributes:
        index: Original row index
        value: The flagged column's value
        point: Full coordinate vector of the row
        column_index: Column in which the row was flagged
    """

    index: int
    value: float
    point: tuple[float, ...]
    column_index: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "index": self.index,
            "value": self.value,
            "point": list(self.point),
            "column_index": self.column_index,
        }


@dataclass(frozen=True)
class AnalysisResult:
    """Outliers found by a single method across all columns.

    Attributes:
        method_name: Display name of the method
        description: Method description
        outliers: Flagged rows, unique per (index, column_index)
    """

    method_name: str
    description: str
    outliers: tuple[OutlierRecord, ...] = ()

    @property
    def outlier_count(self) -> int:
        return len(self.outliers)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "method_name": self.method_name,
            "description": self.description,
            "outliers": [o.to_dict() for o in self.outliers],
        }

    def format_for_display(self, headers: Sequence[str] | None = None) -> str:
        """Format as human-readable string.

        Args:
            headers: Column headers; blank or missing ones become "Column N"
        """
        count = self.outlier_count
        lines = [
            f"**{self.method_name}** ({count} Outlier{'' if count == 1 else 's'})",
            f"  {self.description}",
        ]
        if not self.outliers:
            lines.append("  No outliers were detected by this method.")
            return "\n".join(lines)

        for o in self.outliers:
            column = _column_label(headers, o.column_index)
            point = ", ".join(f"{p:.2f}" for p in o.point)
            lines.append(f"  #{o.index} {column}: {o.value:.4f} [{point}]")
        return "\n".join(lines)


def _column_label(headers: Sequence[str] | None, column_index: int) -> str:
    if headers is not None and column_index < len(headers) and headers[column_index]:
        return headers[column_index]
    return f"Column {column_index + 1}"


def _run_method(method: DetectionMethod, dataset: DataSet) -> AnalysisResult:
    points = dataset.point_by_index()
    outliers: dict[tuple[int, int], OutlierRecord] = {}

    for column_index in range(dataset.dimensions):
        column = dataset.column(column_index)
        for index in dict.fromkeys(method.fn(column)):
            point = points.get(index)
            if point is None:
                raise DatasetShapeError(
                    f"{method.name} flagged unknown row index {index}",
                    column_index=column_index,
                )
            key = (index, column_index)
            if key in outliers:
                continue
            outliers[key] = OutlierRecord(
                index=index,
                value=point.values[column_index],
                point=point.values,
                column_index=column_index,
            )

    logger.debug(f"{method.name}: {len(outliers)} outlier(s) flagged")
    return AnalysisResult(
        method_name=method.name,
        description=method.description,
        outliers=tuple(outliers.values()),
    )


def run_all_analyses(
    dataset: DataSet,
    thresholds: DetectionThresholds | None = None,
    catalog: Sequence[DetectionMethod] | None = None,
) -> list[AnalysisResult]:
    """Run every catalog method over every column of the dataset.

    Args:
        dataset: Validated dataset
        thresholds: Detection thresholds (None = documented defaults)
        catalog: Methods to run (None = the standard seven, built from thresholds)

    Returns:
        One AnalysisResult per method, in catalog order
    """
    methods = catalog if catalog is not None else build_catalog(thresholds)
    logger.debug(
        f"Analysing {len(dataset)} points in {dataset.dimensions} dimension(s) "
        f"with {len(methods)} methods"
    )
    return [_run_method(method, dataset) for method in methods]


def report_to_dict(report: Sequence[AnalysisResult]) -> list[dict[str, Any]]:
    """Convert a report to a JSON-serializable list."""
    return [result.to_dict() for result in report]


def format_report(
    report: Sequence[AnalysisResult], headers: Sequence[str] | None = None
) -> str:
    """Format a full report as human-readable text."""
    parts = [result.format_for_display(headers) for result in report]
    return "\n\n".join(parts) if parts else "No analysis results."


def flagged_point_indices(report: Sequence[AnalysisResult]) -> list[int]:
    """Row indices flagged by any method, in first-seen order."""
    seen: dict[int, None] = {}
    for result in report:
        for outlier in result.outliers:
            seen.setdefault(outlier.index, None)
    return list(seen)
