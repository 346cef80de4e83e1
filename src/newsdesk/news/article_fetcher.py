"""Extract readable article text from a publisher page."""

import logging
import re

import httpx
from bs4 import BeautifulSoup

from newsdesk.errors import EmptyInputError, ProviderError

logger = logging.getLogger(__name__)

UNWANTED_SELECTORS = [
    "script",
    "style",
    "nav",
    "header",
    "footer",
    "iframe",
    ".advertisement",
    '[class*="ad-"]',
    '[id*="ad-"]',
]

CONTENT_SELECTORS = [
    "article",
    '[class*="article-content"]',
    '[class*="article-body"]',
    '[class*="story-content"]',
    '[class*="story-body"]',
    "main",
    ".post-content",
    ".entry-content",
]

MIN_PARAGRAPH_CHARS = 100


def extract_content(html: str) -> str:
    """Return the main text of an HTML page, whitespace-collapsed.

    Tries well-known article containers first, then falls back to joining
    every paragraph longer than ``MIN_PARAGRAPH_CHARS``.
    """
    soup = BeautifulSoup(html, "html.parser")
    for selector in UNWANTED_SELECTORS:
        for element in soup.select(selector):
            element.decompose()

    content = ""
    for selector in CONTENT_SELECTORS:
        element = soup.select_one(selector)
        if element is not None:
            content = element.get_text(" ", strip=True)
            break

    if not content:
        paragraphs = [p.get_text(" ", strip=True) for p in soup.find_all("p")]
        content = "\n\n".join(p for p in paragraphs if len(p) > MIN_PARAGRAPH_CHARS)

    return re.sub(r"\s+", " ", content).strip()


class ArticleFetcher:
    """Download a page and extract its article text.

    Args:
        timeout: HTTP timeout in seconds.
    """

    def __init__(self, *, timeout: float = 30.0) -> None:
        self._timeout = timeout

    async def fetch(self, url: str) -> str:
        """Fetch ``url`` and return its article text.

        Raises:
            EmptyInputError: If no URL is given or no content could be extracted.
            ProviderError: If the page could not be downloaded.
        """
        if not url:
            raise EmptyInputError("URL is required")

        try:
            async with httpx.AsyncClient(timeout=self._timeout, follow_redirects=True) as client:
                response = await client.get(url)
                response.raise_for_status()
                html = response.text
        except httpx.HTTPError as e:
            raise ProviderError(f"Failed to fetch article content: {e}") from e

        content = extract_content(html)
        if not content:
            raise EmptyInputError("Could not extract article content")
        logger.debug("Extracted %d chars from %s", len(content), url)
        return content
