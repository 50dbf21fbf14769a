"""Load spreadsheet and CSV files into a validated DataSet.

The first row holds the column headers and every following row is a data
row. Cells are coerced to numbers; rows that do not end up with exactly one
number per header are skipped with a warning, keeping their row position out
of the dataset so the remaining indices still refer to the source file.

Example:
    >>> from outlier_finder.ingest import load_dataset
    >>> ds = load_dataset("measurements.xlsx")
    >>> print(f"{ds.dimensions}D, {len(ds)} points")
"""

from __future__ import annotations

import csv
import logging
import math
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

import pandas as pd
from pydantic import ValidationError

from outlier_finder.core.dataset import MAX_DIMENSIONS, MIN_DIMENSIONS, DataPoint, DataSet
from outlier_finder.exceptions import DatasetParseError

logger = logging.getLogger(__name__)

EXCEL_SUFFIXES = frozenset({".xlsx", ".xlsm", ".xls"})
CSV_SUFFIXES = frozenset({".csv", ".txt"})


def _numeric_cells(row: Iterable[Any]) -> list[float]:
    """Coerce cells to float, dropping blanks, non-numeric and infinite cells."""
    # Whole-cell parsing only: "12abc" is non-numeric here, not 12.
    coerced = pd.to_numeric(pd.Series(list(row), dtype=object), errors="coerce")
    return [float(v) for v in coerced.dropna() if math.isfinite(v)]


def dataset_from_rows(
    headers: Sequence[Any],
    rows: Iterable[Iterable[Any]],
    source: str | None = None,
) -> DataSet:
    """Build a DataSet from a header row and raw data rows.

    Args:
        headers: Header cells; blank cells are ignored
        rows: Data rows in file order
        source: Name of the originating file, for error messages

    Returns:
        Validated DataSet

    Raises:
        DatasetParseError: If no row is usable or the column count is unsupported
    """
    names = [str(h) for h in headers if not pd.isna(h)]

    dimensions = len(names)
    if not MIN_DIMENSIONS <= dimensions <= MAX_DIMENSIONS:
        raise DatasetParseError(
            f"Unsupported number of dimensions: {dimensions}. "
            "Only 1D, 2D, and 3D data are supported.",
            source=source,
        )

    points: list[tuple[int, tuple[float, ...]]] = []
    for position, row in enumerate(rows):
        values = _numeric_cells(row)
        if len(values) != len(names):
            logger.warning(
                f"Row {position + 1} has mismatched number of numeric columns. Skipping."
            )
            continue
        points.append((position, tuple(values)))

    if not points:
        raise DatasetParseError(
            "No valid numeric data found in the file. Please ensure columns are numeric.",
            source=source,
        )

    try:
        return DataSet(
            dimensions=dimensions,
            headers=tuple(names),
            data=tuple(DataPoint(index=i, values=v) for i, v in points),
        )
    except ValidationError as e:
        raise DatasetParseError(f"Invalid dataset: {e}", source=source) from e


def dataset_from_frame(frame: pd.DataFrame, source: str | None = None) -> DataSet:
    """Build a DataSet from a header-less frame whose first row is the header.

    Raises:
        DatasetParseError: If the frame has no data row or no usable rows
    """
    if len(frame) < 2:
        raise DatasetParseError(
            "Dataset must have a header row and at least one data row.",
            source=source,
        )
    rows = frame.itertuples(index=False, name=None)
    headers = next(rows)
    return dataset_from_rows(headers, rows, source=source)


def _csv_width(path: Path) -> int:
    """Largest field count of any line, so ragged rows survive parsing."""
    with path.open(newline="") as fh:
        return max((len(row) for row in csv.reader(fh)), default=0)


def _read_csv(path: Path) -> pd.DataFrame:
    width = _csv_width(path)
    if width == 0:
        raise DatasetParseError(f"{path.name} is empty", source=str(path))
    return pd.read_csv(path, header=None, names=list(range(width)))


def read_table(path: str | Path, sheet_name: str | int = 0) -> pd.DataFrame:
    """Read a spreadsheet or CSV file without interpreting a header row.

    Args:
        path: File to read
        sheet_name: Worksheet name or position (spreadsheets only)

    Raises:
        DatasetParseError: If the format is unsupported or the file is unreadable
    """
    path = Path(path)
    suffix = path.suffix.lower()

    try:
        if suffix in EXCEL_SUFFIXES:
            return pd.read_excel(path, sheet_name=sheet_name, header=None)
        if suffix in CSV_SUFFIXES:
            return _read_csv(path)
    except (OSError, ValueError) as e:
        raise DatasetParseError(f"Could not read {path.name}: {e}", source=str(path)) from e

    raise DatasetParseError(
        f"Unsupported file type: '{path.suffix}'. Use .xlsx, .xls or .csv.",
        source=str(path),
    )


def load_dataset(path: str | Path, sheet_name: str | int = 0) -> DataSet:
    """Read a file and turn it into a DataSet.

    Args:
        path: Spreadsheet (.xlsx/.xls) or CSV file
        sheet_name: Worksheet name or position (spreadsheets only)

    Returns:
        Validated DataSet
    """
    frame = read_table(path, sheet_name=sheet_name)
    dataset = dataset_from_frame(frame, source=str(path))
    logger.info(f"Loaded {len(dataset)} points ({dataset.dimensions}D) from {Path(path).name}")
    return dataset
