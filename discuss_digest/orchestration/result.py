"""Digest run result data structure."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from discuss_digest.models.item import DiscussItem
from discuss_digest.models.notification import NotificationResult
from discuss_digest.services.incremental_fetcher import StopReason
from discuss_digest.utils.timestamps import format_timestamp


class CutoffSource(str, Enum):
    """Where the cutoff of a run came from"""

    OVERRIDE = "override"
    CHECKPOINT = "checkpoint"
    INITIAL_CUTOFF = "initial_cutoff"
    LOOKBACK = "lookback"


@dataclass
class RunResult:
    """Result of a digest run.

    Aggregates what was fetched and what each collaborator did with it.
    """

    run_id: str
    cutoff: datetime
    cutoff_source: CutoffSource
    items: List[DiscussItem] = field(default_factory=list)
    pages_fetched: int = 0
    stop_reason: Optional[StopReason] = None
    skipped_items: int = 0
    report_path: Optional[Path] = None
    notification: Optional[NotificationResult] = None
    checkpoint_written: Optional[datetime] = None
    checkpoint_error: Optional[str] = None

    @property
    def nothing_new(self) -> bool:
        return not self.items

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        result: Dict[str, Any] = {
            "run_id": self.run_id,
            "cutoff": format_timestamp(self.cutoff),
            "cutoff_source": self.cutoff_source.value,
            "items": len(self.items),
            "pages_fetched": self.pages_fetched,
            "stop_reason": self.stop_reason.value if self.stop_reason else None,
            "skipped_items": self.skipped_items,
            "report_path": str(self.report_path) if self.report_path else None,
            "checkpoint_written": (
                format_timestamp(self.checkpoint_written)
                if self.checkpoint_written
                else None
            ),
            "checkpoint_error": self.checkpoint_error,
        }
        if self.notification is not None:
            result["notification"] = {
                "success": self.notification.success,
                "recipients": self.notification.recipients,
                "status_code": self.notification.status_code,
            }
        return result
