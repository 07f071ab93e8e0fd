from __future__ import annotations

import logging
import threading
import uuid
from collections import OrderedDict
from dataclasses import replace
from datetime import datetime, timezone
from typing import List, Optional

from sitecrawl.domain.crawl_history import (
    STATUS_COMPLETED,
    STATUS_FAILED,
    CrawlHistoryEntry,
)
from sitecrawl.domain.crawl_result import CrawlResult
from sitecrawl.utils.url_utils import extract_domain

logger = logging.getLogger(__name__)


class InMemoryCrawlHistory:
    """Thread-safe in-memory history of root crawl invocations.

    Ephemeral and single-process; the oldest entries are evicted once
    `max_entries` is exceeded. Returned entries are copies.
    """

    def __init__(self, *, max_entries: int = 100):
        if max_entries < 1:
            raise ValueError("max_entries must be >= 1")
        self._lock = threading.Lock()
        self._max_entries = max_entries
        self._entries: "OrderedDict[str, CrawlHistoryEntry]" = OrderedDict()

    def start(self, url: str) -> CrawlHistoryEntry:
        with self._lock:
            entry = CrawlHistoryEntry(
                id=str(uuid.uuid4()),
                url=url,
                domain=extract_domain(url),
                timestamp=datetime.now(timezone.utc),
            )
            self._entries[entry.id] = entry
            while len(self._entries) > self._max_entries:
                evicted_id, _ = self._entries.popitem(last=False)
                logger.debug("Evicted crawl history entry %s", evicted_id)
            return replace(entry)

    def complete(self, entry_id: str, result: CrawlResult) -> Optional[CrawlHistoryEntry]:
        """Record the outcome of a crawl; a root that could not be fetched counts as failed."""
        with self._lock:
            entry = self._entries.get(entry_id)
            if entry is None:
                return None
            entry.results_count = len(result.links)
            entry.pages_count = result.page_count()
            if result.fetch_failed:
                entry.status = STATUS_FAILED
                entry.error = f"could not fetch {result.url}"
            else:
                entry.status = STATUS_COMPLETED
            return replace(entry)

    def fail(self, entry_id: str, error: Optional[str] = None) -> Optional[CrawlHistoryEntry]:
        with self._lock:
            entry = self._entries.get(entry_id)
            if entry is None:
                return None
            entry.status = STATUS_FAILED
            entry.error = error
            return replace(entry)

    def get(self, entry_id: str) -> Optional[CrawlHistoryEntry]:
        with self._lock:
            entry = self._entries.get(entry_id)
            return replace(entry) if entry else None

    def list(self, limit: Optional[int] = None) -> List[CrawlHistoryEntry]:
        """Return entries, most recent first."""
        with self._lock:
            entries = [replace(e) for e in reversed(self._entries.values())]
        if limit is not None and limit >= 0:
            entries = entries[:limit]
        return entries

    def clear(self) -> int:
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
            return count
