"""Pytest configuration and fixtures for outlier-finder tests."""

from collections.abc import Callable, Sequence

import pytest

from outlier_finder.core.dataset import ColumnEntry, DataPoint, DataSet


def _column(values: Sequence[float]) -> list[ColumnEntry]:
    return [ColumnEntry(float(v), i) for i, v in enumerate(values)]


def _dataset(rows: Sequence[Sequence[float]], headers: Sequence[str] | None = None) -> DataSet:
    dimensions = len(rows[0])
    return DataSet(
        dimensions=dimensions,
        headers=tuple(headers) if headers is not None else tuple(f"c{i}" for i in range(dimensions)),
        data=tuple(DataPoint(index=i, values=tuple(r)) for i, r in enumerate(rows)),
    )


@pytest.fixture
def make_column() -> Callable[[Sequence[float]], list[ColumnEntry]]:
    """Return a factory building a column indexed 0..n-1."""
    return _column


@pytest.fixture
def make_dataset() -> Callable[..., DataSet]:
    """Return a factory building a dataset from row tuples."""
    return _dataset


@pytest.fixture
def spike_values() -> list[float]:
    """Small column with one large value (index 5)."""
    return [10, 12, 11, 13, 12, 100]


@pytest.fixture
def injected_values() -> list[float]:
    """25 evenly spread values in [0, 9.6] plus 1000 at index 25."""
    return [0.4 * k for k in range(25)] + [1000.0]


@pytest.fixture
def constant_values() -> list[float]:
    """Column with no variation."""
    return [5, 5, 5, 5, 5]


@pytest.fixture
def two_dimensional_dataset() -> DataSet:
    """2-D dataset where row 5 is extreme in column 0 only."""
    return _dataset(
        [(10, 1), (12, 2), (11, 3), (13, 4), (12, 5), (100, 6)],
        headers=("height", "weight"),
    )
