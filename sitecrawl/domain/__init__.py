"""Domain objects for SiteCrawl - explicit re-exports to satisfy linters."""
from .crawl_request import CrawlRequest as CrawlRequest
from .crawl_result import CrawlResult as CrawlResult
from .website_content import WebsiteContent as WebsiteContent
from .crawl_history import CrawlHistoryEntry as CrawlHistoryEntry
from .http_response import HttpResponse as HttpResponse

__all__ = ["CrawlRequest", "CrawlResult", "WebsiteContent", "CrawlHistoryEntry", "HttpResponse"]
