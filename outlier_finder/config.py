"""Configuration management for outlier-finder.

Uses pydantic-settings for type-safe environment variable loading.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from outlier_finder.core.thresholds import (
    ESD_CRITICAL_VALUE,
    ESD_MAX_OUTLIER_FRACTION,
    GRUBBS_CRITICAL_VALUE,
    IQR_MULTIPLIER,
    MODIFIED_ZSCORE_THRESHOLD,
    PEIRCE_THRESHOLD,
    ZSCORE_THRESHOLD,
    DetectionThresholds,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="OUTLIER_FINDER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )

    # Detection thresholds
    iqr_multiplier: float = Field(
        default=IQR_MULTIPLIER,
        gt=0,
        description="Fence width in IQRs beyond the quartiles",
    )
    zscore_threshold: float = Field(
        default=ZSCORE_THRESHOLD,
        gt=0,
        description="Z-score above which a value is flagged",
    )
    modified_zscore_threshold: float = Field(
        default=MODIFIED_ZSCORE_THRESHOLD,
        gt=0,
        description="Modified Z-score above which a value is flagged",
    )
    peirce_threshold: float = Field(
        default=PEIRCE_THRESHOLD,
        gt=0,
        description="Modified Z-score threshold used as the Peirce proxy",
    )
    grubbs_critical_value: float = Field(
        default=GRUBBS_CRITICAL_VALUE,
        gt=0,
        description="Fixed critical value for the simplified Grubbs test",
    )
    esd_critical_value: float = Field(
        default=ESD_CRITICAL_VALUE,
        gt=0,
        description="Fixed critical value for the simplified generalized ESD test",
    )
    esd_max_outlier_fraction: float = Field(
        default=ESD_MAX_OUTLIER_FRACTION,
        ge=0,
        le=1,
        description="Upper bound on the share of a column ESD may remove",
    )

    def thresholds(self) -> DetectionThresholds:
        """Build the detection thresholds described by these settings."""
        return DetectionThresholds(
            iqr_multiplier=self.iqr_multiplier,
            zscore_threshold=self.zscore_threshold,
            modified_zscore_threshold=self.modified_zscore_threshold,
            peirce_threshold=self.peirce_threshold,
            grubbs_critical_value=self.grubbs_critical_value,
            esd_critical_value=self.esd_critical_value,
            esd_max_outlier_fraction=self.esd_max_outlier_fraction,
        )


def get_settings() -> Settings:
    """Load settings from the current environment."""
    return Settings()
