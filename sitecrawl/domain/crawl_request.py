from __future__ import annotations

from dataclasses import dataclass

from sitecrawl import config
from sitecrawl.exceptions import CrawlRequestValidationError
from sitecrawl.utils.url_utils import is_valid_url


@dataclass(frozen=True)
class CrawlRequest:
    """Validated options for one root crawl.

    Build instances with `CrawlRequest.create`; depth and page budget are
    validated and clamped there once and never renegotiated during the crawl.
    """

    url: str
    depth: int
    max_pages: int
    extract_content: bool = False
    follow_navigation: bool = False

    @classmethod
    def create(
        cls,
        url,
        depth=1,
        max_pages=10,
        extract_content: bool = False,
        follow_navigation: bool = False,
    ) -> "CrawlRequest":
        if not is_valid_url(url):
            raise CrawlRequestValidationError("url", f"Invalid URL: {url!r}")
        depth = _require_positive_int("depth", depth)
        max_pages = _require_positive_int("maxPages", max_pages)
        return cls(
            url=url.strip(),
            depth=min(depth, config.MAX_DEPTH),
            max_pages=min(max_pages, config.MAX_PAGES),
            extract_content=bool(extract_content),
            follow_navigation=bool(follow_navigation),
        )


def _require_positive_int(field: str, value) -> int:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise CrawlRequestValidationError(field, f"{field} must be an integer")
    if value < 1:
        raise CrawlRequestValidationError(field, f"{field} must be at least 1")
    return value
