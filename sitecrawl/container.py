"""Dependency injection container for the application."""
from dependency_injector import containers, providers
import requests

from sitecrawl import config as env
from sitecrawl.services.crawl_executor import CrawlExecutor
from sitecrawl.services.crawl_history import InMemoryCrawlHistory
from sitecrawl.services.crawl_policy import CrawlPolicy
from sitecrawl.services.fetcher import HttpServiceFetcher
from sitecrawl.services.html_content_extractor import HtmlContentExtractor
from sitecrawl.services.http_service import HttpService


# Environment variables used by the container (read via `sitecrawl.config` helpers).
#
# USER_AGENT (str, default: "SiteCrawl/0.1")
#   User-Agent header for outbound HTTP requests.
#
# HTTP_TIMEOUT (int seconds, default: 10)
#   Wall-clock bound for a single page fetch; exceeding it fails that node only.
#
# SITECRAWL_MAX_CHILDREN_PER_NODE (int, default: 2)
#   Branching cap: how many of a page's links are followed when recursing.
#
# SITECRAWL_MAX_CONTENT_CHARS (int, default: 5000)
#   Raw page bodies in API responses are cut to this many characters. 0 disables.
#
# SITECRAWL_HISTORY_MAX_ENTRIES (int, default: 100)
#   Number of crawl history entries kept in memory (oldest evicted first).
#
# SITECRAWL_HOST / SITECRAWL_PORT (str / int, default: "0.0.0.0" / 8000)
#   Bind address for the API server started by run.py.
ENV = {
    "USER_AGENT": env.get_str_env("USER_AGENT", env.DEFAULT_USER_AGENT),
    "HTTP_TIMEOUT": env.get_int_env("HTTP_TIMEOUT", 10),
    "SITECRAWL_MAX_CHILDREN_PER_NODE": env.get_int_env(
        "SITECRAWL_MAX_CHILDREN_PER_NODE", env.DEFAULT_MAX_CHILDREN_PER_NODE
    ),
    "SITECRAWL_MAX_CONTENT_CHARS": env.get_int_env("SITECRAWL_MAX_CONTENT_CHARS", 5000),
    "SITECRAWL_HISTORY_MAX_ENTRIES": env.get_int_env("SITECRAWL_HISTORY_MAX_ENTRIES", 100),
    "SITECRAWL_HOST": env.get_str_env("SITECRAWL_HOST", "0.0.0.0"),
    "SITECRAWL_PORT": env.get_int_env("SITECRAWL_PORT", 8000),
}


class Container(containers.DeclarativeContainer):
    """Dependency injection container for SiteCrawl application."""

    # Configuration
    config = providers.Configuration(default=ENV)

    # Services - Singleton instances
    http_service = providers.Singleton(
        HttpService,
        user_agent=config.USER_AGENT.as_(str),
        http_client=providers.Object(requests.get),
        timeout=config.HTTP_TIMEOUT.as_(int)
    )

    page_fetcher = providers.Singleton(
        HttpServiceFetcher,
        http_service=http_service,
    )

    content_extractor = providers.Singleton(
        HtmlContentExtractor
    )

    crawl_policy = providers.Singleton(
        CrawlPolicy,
        max_children_per_node=config.SITECRAWL_MAX_CHILDREN_PER_NODE.as_(int),
    )

    crawl_history = providers.Singleton(
        InMemoryCrawlHistory,
        max_entries=config.SITECRAWL_HISTORY_MAX_ENTRIES.as_(int),
    )

    crawl_executor = providers.Factory(
        CrawlExecutor,
        fetcher=page_fetcher,
        extractor=content_extractor,
        crawl_policy=crawl_policy,
    )
