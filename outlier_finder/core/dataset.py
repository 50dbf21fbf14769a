"""Validated dataset records consumed by the detection engine.

A ``DataSet`` is produced once (usually by ``outlier_finder.ingest``) and is
read-only afterwards. Shape invariants are enforced at construction, so the
engine can assume every point has exactly ``dimensions`` values.

Example:
    >>> ds = DataSet(
    ...     dimensions=2,
    ...     headers=("x", "y"),
    ...     data=[DataPoint(index=0, values=(1.0, 2.0))],
    ... )
    >>> ds.column(1)
    [ColumnEntry(value=2.0, index=0)]
"""

from __future__ import annotations

from typing import Annotated, NamedTuple, Self

from pydantic import BaseModel, ConfigDict, Field, FiniteFloat, model_validator

from outlier_finder.exceptions import DatasetShapeError

MIN_DIMENSIONS = 1
MAX_DIMENSIONS = 3


class ColumnEntry(NamedTuple):
    """One value of a single column, tagged with its original row index."""

    value: float
    index: int


class DataPoint(BaseModel):
    """A single row of the dataset.

    Attributes:
        index: Original row number (stable, unique within a dataset)
        values: Coordinates, one per dataset dimension
    """

    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0, description="Original row number")
    values: tuple[FiniteFloat, ...] = Field(..., min_length=1, description="Coordinates")


class DataSet(BaseModel):
    """A small numeric table with 1-3 columns.

    Attributes:
        dimensions: Number of numeric columns
        headers: Column names, one per dimension
        data: Rows in original order
    """

    model_config = ConfigDict(frozen=True)

    dimensions: Annotated[int, Field(ge=MIN_DIMENSIONS, le=MAX_DIMENSIONS)]
    headers: tuple[str, ...]
    data: tuple[DataPoint, ...] = Field(..., min_length=1)

    @model_validator(mode="after")
    def validate_shape(self) -> Self:
        """Check header count, row widths and index uniqueness."""
        if len(self.headers) != self.dimensions:
            raise ValueError(
                f"Expected {self.dimensions} headers, got {len(self.headers)}"
            )

        seen: set[int] = set()
        for point in self.data:
            if len(point.values) != self.dimensions:
                raise ValueError(
                    f"Row {point.index} has {len(point.values)} values, "
                    f"expected {self.dimensions}"
                )
            if point.index in seen:
                raise ValueError(f"Duplicate row index: {point.index}")
            seen.add(point.index)

        return self

    def __len__(self) -> int:
        return len(self.data)

    def column(self, column_index: int) -> list[ColumnEntry]:
        """Extract one dimension as (value, original index) pairs.

        Raises:
            DatasetShapeError: If column_index is outside [0, dimensions)
        """
        if not 0 <= column_index < self.dimensions:
            raise DatasetShapeError(
                f"Column {column_index} out of range for a "
                f"{self.dimensions}-dimensional dataset",
                column_index=column_index,
            )
        return [ColumnEntry(p.values[column_index], p.index) for p in self.data]

    def point_by_index(self) -> dict[int, DataPoint]:
        """Map original row index to its data point."""
        return {p.index: p for p in self.data}
