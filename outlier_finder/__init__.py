"""outlier-finder: per-method outlier detection for small numeric tables.

This package runs seven statistical outlier tests (IQR, Z-score, modified
Z-score, Grubbs, generalized ESD, Dixon's Q and a Peirce proxy) over every
column of a 1-3 dimensional dataset and reports which rows each method flags.
"""

__version__ = "0.1.0"


def __getattr__(name: str):
    """Lazy imports for main package exports."""
    if name in ("DataPoint", "DataSet"):
        from outlier_finder.core import dataset

        return getattr(dataset, name)
    if name in ("AnalysisResult", "OutlierRecord", "run_all_analyses"):
        from outlier_finder.core import engine

        return getattr(engine, name)
    if name == "load_dataset":
        from outlier_finder.ingest import load_dataset

        return load_dataset
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "AnalysisResult",
    "DataPoint",
    "DataSet",
    "OutlierRecord",
    "load_dataset",
    "run_all_analyses",
    "__version__",
]
