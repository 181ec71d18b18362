"""
Configuration settings and constants for wbload.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# =============================================================================
# LOGGING
# =============================================================================


class LogLevel(str, Enum):
    """Log levels accepted by --log-level and WBLOAD_LOG_LEVEL."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


# =============================================================================
# SETTINGS
# =============================================================================


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="WBLOAD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API Settings
    api_base: str = Field(default="https://api.worldbank.org/v2")
    request_timeout: float | None = Field(default=60.0)

    # Page sizes
    per_page: int = Field(default=1000, gt=0)
    sources_per_page: int = Field(default=1000, gt=0)
    indicators_per_page: int = Field(default=10000, gt=0)

    # Logging
    log_level: LogLevel = Field(default=LogLevel.INFO)


settings = Settings()


# =============================================================================
# ENUMS
# =============================================================================


class DownloadStatus(str, Enum):
    """Outcome of a download command."""

    LOADED = "loaded"
    SKIPPED = "skipped"


# =============================================================================
# DOWNLOAD OPTIONS
# =============================================================================


@dataclass(frozen=True)
class DownloadConfig:
    """Options for a single indicator download."""

    indicator: str
    timeframe: str
    database: Path | None = None
    table: str | None = None
    per_page: int = field(default_factory=lambda: settings.per_page)
    force: bool = False
    csv_path: Path | None = None
    parquet_path: Path | None = None

    @property
    def table_name(self) -> str:
        """Destination table name for this download."""
        return derive_table_name(self.indicator, self.table)


def derive_table_name(indicator: str, table: str | None = None) -> str:
    """
    Resolve the destination table name.

    Args:
        indicator: Indicator code, e.g. NY.GDP.MKTP.CD.
        table: Explicit table name. Takes precedence when given.

    Returns:
        The explicit name, or the indicator code with dots replaced by underscores.
    """
    if table:
        return table
    return indicator.replace(".", "_")
