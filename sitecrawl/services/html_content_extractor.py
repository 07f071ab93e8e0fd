import logging
import re
from typing import Callable, Optional
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup

from sitecrawl.domain.website_content import WebsiteContent
from sitecrawl.utils.url_utils import HTTP_SCHEMES

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")


class HtmlContentExtractor:
    """Pulls title, visible text, images, meta tags and links out of HTML.

    Both public operations are pure and never raise on bad markup.
    """

    def __init__(
        self,
        soup_factory: Optional[Callable[[str], BeautifulSoup]] = None,
    ):
        self._soup_factory = soup_factory or (lambda html: BeautifulSoup(html, "html.parser"))

    def extract(self, html: Optional[str], base_url: str) -> WebsiteContent:
        if not html:
            return WebsiteContent()

        try:
            soup = self._soup_factory(html)
            return WebsiteContent(
                title=self._extract_title(soup),
                images=self._extract_images(soup),
                metadata=self._extract_metadata(soup),
                # text last: it strips script/style from the soup
                text=self._extract_text(soup),
            )
        except Exception:
            logger.exception("Error extracting content from %s", base_url)
            return WebsiteContent()

    def extract_links(self, html: Optional[str], base_url: str) -> list[str]:
        if not html:
            return []

        try:
            soup = self._soup_factory(html)
        except Exception:
            logger.exception("Error parsing HTML for links from %s", base_url)
            return []

        links = []
        for a in soup.find_all("a", href=True):
            href = a.get("href").strip()
            if not href or href.startswith("#"):
                continue
            try:
                abs_url = urljoin(base_url, href)
                scheme = urlparse(abs_url).scheme
            except ValueError:
                logger.debug("Dropping unresolvable href %r on %s", href, base_url)
                continue
            if scheme.lower() not in HTTP_SCHEMES:
                continue
            links.append(abs_url)
        return links

    def _extract_title(self, soup: BeautifulSoup) -> str:
        title = soup.find("title")
        if title is None:
            return ""
        return title.get_text().strip()

    def _extract_text(self, soup: BeautifulSoup) -> str:
        for element in soup.find_all(["script", "style"]):
            element.decompose()
        return _WHITESPACE_RE.sub(" ", soup.get_text(separator=" ")).strip()

    def _extract_images(self, soup: BeautifulSoup) -> tuple[str, ...]:
        images = []
        for img in soup.find_all("img"):
            src = img.get("src")
            if src is not None:
                images.append(src)
        return tuple(images)

    def _extract_metadata(self, soup: BeautifulSoup) -> dict[str, str]:
        metadata = {}
        for meta in soup.find_all("meta"):
            name = meta.get("name")
            content = meta.get("content")
            if name and content is not None:
                metadata[name] = content
        return metadata
