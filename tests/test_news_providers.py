"""Tests for the NewsAPI, Guardian and MediaStack providers."""

from unittest.mock import MagicMock

import httpx
import pytest

from newsdesk.data import Category
from newsdesk.errors import ConfigurationError
from newsdesk.news import GuardianProvider, MediaStackProvider, NewsAPIProvider


def _mock_get(monkeypatch: pytest.MonkeyPatch, data: dict) -> dict:
    """Patch httpx.AsyncClient.get to return ``data`` and capture the request."""
    captured: dict = {}
    mock_response = MagicMock()
    mock_response.json.return_value = data
    mock_response.raise_for_status = MagicMock()

    async def mock_get(self, url, *args, **kwargs):
        captured["url"] = url
        captured["params"] = kwargs.get("params", {})
        return mock_response

    monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)
    return captured


class TestNewsAPIProvider:
    @pytest.fixture
    def response_data(self) -> dict:
        return {
            "status": "ok",
            "articles": [
                {
                    "source": {"id": "bbc-news", "name": "BBC News"},
                    "author": "Reporter",
                    "title": "Markets rally",
                    "description": "Stocks rose.",
                    "url": "https://bbc.example/markets",
                    "urlToImage": "https://bbc.example/img.jpg",
                    "publishedAt": "2024-05-01T10:00:00Z",
                    "content": "Stocks rose on Monday.",
                },
                {
                    "source": {"id": None, "name": None},
                    "title": "Unsourced story",
                    "description": "Something happened.",
                    "url": "https://example.com/story",
                    "publishedAt": "2024-05-01T09:00:00Z",
                },
            ],
        }

    def test_init_requires_api_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NEWS_API_KEY", raising=False)
        with pytest.raises(ConfigurationError, match="key required"):
            NewsAPIProvider()

    def test_missing_key_is_a_value_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NEWS_API_KEY", raising=False)
        with pytest.raises(ValueError):
            NewsAPIProvider()

    def test_init_uses_env_var(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NEWS_API_KEY", "env-key")
        provider = NewsAPIProvider()
        assert provider._api_key == "env-key"

    async def test_fetch_maps_articles(
        self, response_data: dict, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        captured = _mock_get(monkeypatch, response_data)
        provider = NewsAPIProvider(api_key="test-key")

        candidates, usage = await provider.fetch(Category.BUSINESS, limit=5)

        assert usage.news_requests == 1
        assert captured["params"]["category"] == "business"
        assert captured["params"]["pageSize"] == 5
        assert captured["params"]["country"] == "us"
        first, second = candidates
        assert first.title == "Markets rally"
        assert first.source_id == "bbc-news"
        assert first.image_url == "https://bbc.example/img.jpg"
        assert first.category is Category.BUSINESS
        assert second.source_id == "newsapi"
        assert second.source_name == "News API"

    async def test_fetch_propagates_http_errors(self, monkeypatch: pytest.MonkeyPatch) -> None:
        async def mock_get(self, url, *args, **kwargs):
            raise httpx.ConnectError("unreachable")

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)
        provider = NewsAPIProvider(api_key="test-key")
        with pytest.raises(httpx.HTTPError):
            await provider.fetch(Category.GENERAL)


class TestGuardianProvider:
    @pytest.fixture
    def response_data(self) -> dict:
        return {
            "response": {
                "results": [
                    {
                        "webTitle": "NHS waiting lists",
                        "webUrl": "https://guardian.example/nhs",
                        "webPublicationDate": "2024-05-01T11:00:00Z",
                        "fields": {
                            "bodyText": "b" * 250,
                            "thumbnail": "https://guardian.example/t.jpg",
                            "byline": "A Writer",
                        },
                    },
                    {
                        "webTitle": "Headline only",
                        "webUrl": "https://guardian.example/short",
                        "webPublicationDate": "2024-05-01T10:00:00Z",
                    },
                ]
            }
        }

    def test_init_requires_api_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("GUARDIAN_API_KEY", raising=False)
        with pytest.raises(ConfigurationError, match="key required"):
            GuardianProvider()

    async def test_fetch_maps_results(
        self, response_data: dict, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        captured = _mock_get(monkeypatch, response_data)
        provider = GuardianProvider(api_key="test-key")

        candidates, usage = await provider.fetch(Category.HEALTH)

        assert captured["params"]["section"] == "healthcare"
        assert captured["params"]["order-by"] == "newest"
        assert usage.news_requests == 1
        first, second = candidates
        assert first.description == "b" * 200 + "..."
        assert first.content == "b" * 250
        assert first.source_id == "guardian"
        assert first.source_name == "The Guardian"
        assert first.author == "A Writer"
        # No body text: no description, headline stands in as content
        assert second.description is None
        assert second.content == "Headline only"

    async def test_general_maps_to_news_section(self, monkeypatch: pytest.MonkeyPatch) -> None:
        captured = _mock_get(monkeypatch, {"response": {"results": []}})
        provider = GuardianProvider(api_key="test-key")
        candidates, _ = await provider.fetch(Category.GENERAL)
        assert candidates == []
        assert captured["params"]["section"] == "news"


class TestMediaStackProvider:
    def test_init_requires_api_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("MEDIASTACK_API_KEY", raising=False)
        with pytest.raises(ConfigurationError, match="key required"):
            MediaStackProvider()

    async def test_fetch_filters_incomplete_and_removed(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        captured = _mock_get(
            monkeypatch,
            {
                "data": [
                    {
                        "title": "AI breakthroughs in 2024",
                        "description": "New models.",
                        "url": "https://ms.example/ai",
                        "source": "Tech Daily",
                        "image": None,
                        "published_at": "2024-05-01T09:00:00+00:00",
                    },
                    {
                        "title": "[Removed]",
                        "description": "gone",
                        "url": "https://ms.example/removed",
                        "published_at": "2024-05-01T09:00:00+00:00",
                    },
                    {
                        "title": "No url",
                        "description": "missing",
                        "published_at": "2024-05-01T09:00:00+00:00",
                    },
                    {
                        "title": "No source",
                        "description": "anonymous",
                        "url": "https://ms.example/anon",
                        "published_at": "2024-05-01T08:00:00+00:00",
                    },
                ]
            },
        )
        provider = MediaStackProvider(api_key="test-key")

        candidates, _ = await provider.fetch(Category.TECHNOLOGY)

        assert captured["params"]["categories"] == "technology"
        assert captured["params"]["sort"] == "published_desc"
        assert [c.title for c in candidates] == ["AI breakthroughs in 2024", "No source"]
        assert candidates[0].source_name == "Tech Daily"
        assert candidates[0].content == "New models."
        assert candidates[1].source_name == "MediaStack"
