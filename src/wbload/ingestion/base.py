"""
Result types shared by the download pipeline.
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

from wbload.config import DownloadStatus


@dataclass
class DownloadResult:
    """Result of a download command."""

    indicator: str
    table: str
    started_at: datetime
    completed_at: datetime | None = None
    status: DownloadStatus = DownloadStatus.LOADED
    records: int = 0
    entities: int = 0
    periods: list[int] = field(default_factory=list)
    exported: list[Path] = field(default_factory=list)

    @property
    def duration_seconds(self) -> float | None:
        """Calculate duration in seconds."""
        if self.completed_at:
            return (self.completed_at - self.started_at).total_seconds()
        return None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "indicator": self.indicator,
            "table": self.table,
            "started_at": self.started_at.isoformat(),
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "status": self.status.value,
            "records": self.records,
            "entities": self.entities,
            "periods": self.periods,
            "exported": [str(p) for p in self.exported],
            "duration_seconds": self.duration_seconds,
        }
