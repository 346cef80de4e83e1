"""Tests for article content extraction."""

from unittest.mock import MagicMock

import httpx
import pytest

from newsdesk.errors import EmptyInputError, ProviderError
from newsdesk.news import ArticleFetcher, extract_content

LONG = "This paragraph is long enough to count as article prose for the fallback extractor. " * 2


def test_extract_prefers_article_element() -> None:
    html = """
    <html><body>
      <nav>Home | World</nav>
      <article><h1>Title</h1><p>Body   text
      here.</p><script>track()</script></article>
      <footer>Copyright</footer>
    </body></html>
    """
    assert extract_content(html) == "Title Body text here."


def test_extract_removes_ads_inside_content() -> None:
    html = """
    <main>
      <p>Real content.</p>
      <div class="ad-banner">Buy now</div>
      <div id="ad-slot">Sponsored</div>
    </main>
    """
    assert extract_content(html) == "Real content."


def test_extract_falls_back_to_long_paragraphs() -> None:
    html = f"<div><p>Too short.</p><p>{LONG}</p></div>"
    assert extract_content(html) == LONG.strip()


def test_extract_nothing() -> None:
    assert extract_content("<div><p>Tiny.</p></div>") == ""


class TestArticleFetcher:
    async def test_requires_url(self) -> None:
        with pytest.raises(EmptyInputError, match="URL is required"):
            await ArticleFetcher().fetch("")

    async def test_fetch_returns_content(self, monkeypatch: pytest.MonkeyPatch) -> None:
        mock_response = MagicMock()
        mock_response.text = "<article><p>Hello world.</p></article>"
        mock_response.raise_for_status = MagicMock()

        async def mock_get(self, url, *args, **kwargs):
            return mock_response

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)

        assert await ArticleFetcher().fetch("https://example.com/a") == "Hello world."

    async def test_http_error_becomes_provider_error(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        async def mock_get(self, url, *args, **kwargs):
            raise httpx.ConnectError("unreachable")

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)

        with pytest.raises(ProviderError, match="Failed to fetch article content"):
            await ArticleFetcher().fetch("https://example.com/a")

    async def test_empty_page_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        mock_response = MagicMock()
        mock_response.text = "<html><body><nav>menu</nav></body></html>"
        mock_response.raise_for_status = MagicMock()

        async def mock_get(self, url, *args, **kwargs):
            return mock_response

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)

        with pytest.raises(EmptyInputError, match="Could not extract"):
            await ArticleFetcher().fetch("https://example.com/a")
