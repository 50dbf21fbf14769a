"""Exceptions raised by outlier-finder.

Degenerate numeric input (zero variance, samples too small for a test) is
never an error; detectors return an empty result instead. These exceptions
cover malformed input only.
"""

from __future__ import annotations


class OutlierFinderError(Exception):
    """Base exception for all outlier-finder errors."""


class DatasetShapeError(OutlierFinderError, ValueError):
    """Raised when a dataset violates a structural precondition of the engine."""

    def __init__(self, message: str, column_index: int | None = None) -> None:
        super().__init__(message)
        self.column_index = column_index


class DatasetParseError(OutlierFinderError):
    """Raised when a table cannot be turned into a dataset."""

    def __init__(self, message: str, source: str | None = None) -> None:
        super().__init__(message)
        self.source = source
