import logging
from typing import Sequence

from sitecrawl import config
from sitecrawl.domain.crawl_context import CrawlContext

logger = logging.getLogger(__name__)


class CrawlPolicy:
    """Encapsulates crawl decision rules: recursion gate, branching cap and page budget.

    Separates policy decisions from crawl orchestration logic.
    """

    def __init__(self, max_children_per_node: int = config.DEFAULT_MAX_CHILDREN_PER_NODE):
        if max_children_per_node < 1:
            raise ValueError("max_children_per_node must be >= 1")
        self.max_children_per_node = int(max_children_per_node)

    def should_recurse(self, remaining_depth: int, links: Sequence[str], context: CrawlContext) -> bool:
        """Check whether the children of a successfully fetched page should be crawled."""
        if not context.follow_navigation:
            return False
        if remaining_depth <= 1:
            logger.debug("Not recursing (depth exhausted) at remaining depth %s", remaining_depth)
            return False
        return len(links) > 0

    def select_children(self, links: Sequence[str], context: CrawlContext) -> list[str]:
        """Return the prefix of `links` to crawl, reserving one budget slot per child.

        Stops at the first link the page budget cannot cover; skipped links get no node.
        """
        selected = []
        for link in links[: self.max_children_per_node]:
            if not context.budget.try_acquire():
                logger.debug(
                    "Page budget of %s exhausted; skipping %s remaining candidate(s)",
                    context.budget.max_pages,
                    min(len(links), self.max_children_per_node) - len(selected),
                )
                break
            selected.append(link)
        return selected
