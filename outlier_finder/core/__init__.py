"""Core outlier-detection engine.

This module contains:
- Validated dataset records
- Nearest-rank descriptive statistics
- The seven detection algorithms and their ordered catalog
- The orchestrator that assembles per-method reports
"""

from outlier_finder.core.catalog import (
    DEFAULT_CATALOG,
    DetectionMethod,
    build_catalog,
    get_method,
    get_method_names,
)
from outlier_finder.core.dataset import ColumnEntry, DataPoint, DataSet
from outlier_finder.core.engine import (
    AnalysisResult,
    OutlierRecord,
    flagged_point_indices,
    format_report,
    report_to_dict,
    run_all_analyses,
)
from outlier_finder.core.statistics import Statistics, compute_statistics
from outlier_finder.core.thresholds import DetectionThresholds

__all__ = [
    # Data model
    "ColumnEntry",
    "DataPoint",
    "DataSet",
    # Statistics
    "Statistics",
    "compute_statistics",
    # Catalog
    "DEFAULT_CATALOG",
    "DetectionMethod",
    "DetectionThresholds",
    "build_catalog",
    "get_method",
    "get_method_names",
    # Orchestration
    "AnalysisResult",
    "OutlierRecord",
    "flagged_point_indices",
    "format_report",
    "report_to_dict",
    "run_all_analyses",
]
