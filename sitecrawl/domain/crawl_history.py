from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

STATUS_IN_PROGRESS = "in-progress"
STATUS_COMPLETED = "completed"
STATUS_FAILED = "failed"


@dataclass
class CrawlHistoryEntry:
    """Summary of one root crawl invocation."""

    id: str
    url: str
    domain: str
    timestamp: datetime
    status: str = STATUS_IN_PROGRESS
    results_count: int = 0
    pages_count: int = 0
    error: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "url": self.url,
            "domain": self.domain,
            "timestamp": self.timestamp.isoformat(),
            "resultsCount": self.results_count,
            "pagesCount": self.pages_count,
            "status": self.status,
            "error": self.error,
        }
