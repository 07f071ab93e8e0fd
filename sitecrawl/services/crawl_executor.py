import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Optional

from sitecrawl.domain.crawl_context import CrawlContext
from sitecrawl.domain.crawl_request import CrawlRequest
from sitecrawl.domain.crawl_result import CrawlResult
from sitecrawl.domain.http_response import HttpResponse
from sitecrawl.exceptions import HttpFetchError
from sitecrawl.services.crawl_policy import CrawlPolicy
from sitecrawl.services.fetcher import Fetcher
from sitecrawl.services.html_content_extractor import HtmlContentExtractor

logger = logging.getLogger(__name__)


class CrawlExecutor:
    """Executes a bounded recursive crawl given configured collaborators.

    This class owns the crawl control-flow (fetch, extract, maybe recurse,
    assemble the result tree). It does NOT construct dependencies (that stays
    in the DI layer).
    """

    def __init__(
        self,
        *,
        fetcher: Fetcher,
        extractor: HtmlContentExtractor,
        crawl_policy: CrawlPolicy,
    ):
        self.fetcher = fetcher
        self.extractor = extractor
        self.crawl_policy = crawl_policy

    def fetch(self, url: str) -> Optional[HttpResponse]:
        """Fetch a URL once.

        Returns the response (any status code) on success, or None on failure.
        """
        try:
            response: HttpResponse = self.fetcher.fetch(url)
        except HttpFetchError as e:
            logger.warning("Fetch failed for %s: %s", url, e)
            return None
        except Exception as e:
            logger.error("Fetch error for %s: %s", url, e, exc_info=True)
            return None

        logger.info("Fetched %s -> status %s", url, response.status_code)
        if not response.is_success:
            logger.warning("Non-success status for %s: %s", url, response.status_code)

        return response

    def crawl(self, request: CrawlRequest) -> CrawlResult:
        if request is None:
            raise ValueError("request is required for crawl")

        context = CrawlContext(request)
        # the root always fits: max_pages >= 1
        context.budget.try_acquire()
        result = self.crawl_from(request.url, request.depth, context)
        logger.info(
            "Crawl of %s finished: %s page(s), budget %s/%s",
            request.url,
            result.page_count(),
            context.budget.used,
            context.budget.max_pages,
        )
        return result

    def crawl_from(self, url: str, remaining_depth: int, context: CrawlContext) -> CrawlResult:
        """Crawl `url` (whose budget slot is already reserved) and, if allowed, its children."""
        timestamp = datetime.now(timezone.utc)
        response = self.fetch(url)
        if response is None:
            return CrawlResult.failed(url, timestamp)

        body = response.text or ""
        links = self.extractor.extract_links(body, url)
        parsed_content = self.extractor.extract(body, url) if context.extract_content else None

        child_results = None
        if self.crawl_policy.should_recurse(remaining_depth, links, context):
            child_results = self.crawl_children(links, remaining_depth - 1, context)

        return CrawlResult(
            url=url,
            content=body,
            links=tuple(links),
            status=response.status_code,
            timestamp=timestamp,
            parsed_content=parsed_content,
            child_results=child_results,
        )

    def crawl_children(self, links, remaining_depth: int, context: CrawlContext) -> Optional[tuple[CrawlResult, ...]]:
        """Crawl the selected prefix of `links` concurrently, keeping link order."""
        selected = self.crawl_policy.select_children(links, context)
        if not selected:
            return None

        # one pool per parent: the parent thread blocks until its children finish
        with ThreadPoolExecutor(max_workers=len(selected), thread_name_prefix="sitecrawl") as pool:
            futures = [
                pool.submit(self.crawl_from, link, remaining_depth, context)
                for link in selected
            ]
            return tuple(f.result() for f in futures)
