from typing import Optional

from sitecrawl.domain.crawl_request import CrawlRequest
from sitecrawl.domain.page_budget import PageBudget


class CrawlContext:
    """Per-crawl state passed explicitly through the recursion."""

    def __init__(self, request: CrawlRequest, budget: Optional[PageBudget] = None):
        self.request = request
        self.budget = budget if budget is not None else PageBudget(request.max_pages)

    @property
    def extract_content(self) -> bool:
        return self.request.extract_content

    @property
    def follow_navigation(self) -> bool:
        return self.request.follow_navigation
