"""Crawl result tree model."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sitecrawl.domain.website_content import WebsiteContent

FETCH_FAILED_STATUS = 500
FETCH_FAILURE_MARKER = "<html><body>Crawl failed</body></html>"


@dataclass(frozen=True)
class CrawlResult:
    """One node of the crawl tree.

    Created once per fetch attempt and never mutated; children are assembled
    before the parent node is built.
    """

    url: str
    content: str
    links: tuple[str, ...]
    status: int
    timestamp: datetime
    parsed_content: Optional[WebsiteContent] = None
    child_results: Optional[tuple["CrawlResult", ...]] = None

    @classmethod
    def failed(cls, url: str, timestamp: datetime) -> "CrawlResult":
        """Terminal node for a page whose fetch failed at the transport level."""
        return cls(
            url=url,
            content=FETCH_FAILURE_MARKER,
            links=(),
            status=FETCH_FAILED_STATUS,
            timestamp=timestamp,
        )

    @property
    def fetch_failed(self) -> bool:
        return self.status == FETCH_FAILED_STATUS and self.content == FETCH_FAILURE_MARKER

    def page_count(self) -> int:
        """Number of nodes in this subtree, this node included."""
        return 1 + sum(child.page_count() for child in self.child_results or ())

    def max_depth(self) -> int:
        """Number of levels in this subtree; a leaf has depth 1."""
        if not self.child_results:
            return 1
        return 1 + max(child.max_depth() for child in self.child_results)

    def to_dict(self, max_content_chars: Optional[int] = None) -> dict:
        content = self.content
        if max_content_chars and len(content) > max_content_chars:
            content = content[:max_content_chars] + "..."
        d = {
            "url": self.url,
            "content": content,
            "links": list(self.links),
            "status": self.status,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.parsed_content is not None:
            d["parsedContent"] = self.parsed_content.to_dict()
        if self.child_results is not None:
            d["childResults"] = [c.to_dict(max_content_chars) for c in self.child_results]
        return d
