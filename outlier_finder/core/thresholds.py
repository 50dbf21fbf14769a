"""Tunable constants for the detection algorithms.

The critical values here are fixed numbers rather than values derived from
the sample size or a t-distribution. They are kept as-is so that reports
stay reproducible across versions.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

IQR_MULTIPLIER = 1.5
ZSCORE_THRESHOLD = 3.0
MODIFIED_ZSCORE_THRESHOLD = 3.5
MODIFIED_ZSCORE_CONSTANT = 0.6745  # Phi^-1(0.75), scales MAD to sigma
PEIRCE_THRESHOLD = 4.0
GRUBBS_CRITICAL_VALUE = 2.0
ESD_CRITICAL_VALUE = 2.5
ESD_MAX_OUTLIER_FRACTION = 0.1

# (minimum sample size, critical Q), ascending by sample size
DIXON_Q_BRACKETS: tuple[tuple[int, float], ...] = (
    (3, 0.970),
    (4, 0.829),
    (5, 0.710),
    (6, 0.625),
    (7, 0.568),
    (8, 0.526),
    (9, 0.493),
    (10, 0.466),
    (15, 0.338),
    (20, 0.298),
    (30, 0.239),
)
DIXON_MIN_SAMPLES = 3
DIXON_MAX_SAMPLES = 30


class DetectionThresholds(BaseModel):
    """Thresholds bound into the method catalog.

    Attributes:
        iqr_multiplier: Fence width in IQRs beyond q1/q3
        zscore_threshold: Z-score cutoff
        modified_zscore_threshold: Modified Z-score cutoff
        peirce_threshold: Modified Z-score cutoff for the Peirce proxy
        grubbs_critical_value: Critical deviation for Grubbs' test
        esd_critical_value: Critical deviation for each ESD round
        esd_max_outlier_fraction: Share of the column ESD may remove
    """

    model_config = ConfigDict(frozen=True)

    iqr_multiplier: float = Field(default=IQR_MULTIPLIER, gt=0)
    zscore_threshold: float = Field(default=ZSCORE_THRESHOLD, gt=0)
    modified_zscore_threshold: float = Field(default=MODIFIED_ZSCORE_THRESHOLD, gt=0)
    peirce_threshold: float = Field(default=PEIRCE_THRESHOLD, gt=0)
    grubbs_critical_value: float = Field(default=GRUBBS_CRITICAL_VALUE, gt=0)
    esd_critical_value: float = Field(default=ESD_CRITICAL_VALUE, gt=0)
    esd_max_outlier_fraction: float = Field(
        default=ESD_MAX_OUTLIER_FRACTION, ge=0, le=1
    )


def dixon_critical_value(n: int) -> float:
    """Critical Q for a sample of size n.

    Uses the bracket with the largest minimum size not exceeding n, falling
    back to the smallest bracket.
    """
    selected = DIXON_Q_BRACKETS[0][1]
    for size, critical in DIXON_Q_BRACKETS:
        if size <= n:
            selected = critical
        else:
            break
    return selected
