"""Table ingestion for outlier-finder.

Turns spreadsheet and CSV files into validated ``DataSet`` objects.
"""

from outlier_finder.ingest.loader import (
    dataset_from_frame,
    dataset_from_rows,
    load_dataset,
    read_table,
)

__all__ = [
    "dataset_from_frame",
    "dataset_from_rows",
    "load_dataset",
    "read_table",
]
