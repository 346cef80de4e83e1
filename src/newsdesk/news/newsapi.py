"""NewsAPI.org top-headlines provider."""

import logging
import os

import httpx
from pydantic import BaseModel, ValidationError

from newsdesk.data import Category, Usage
from newsdesk.errors import ConfigurationError
from newsdesk.news.base import ArticleCandidate

logger = logging.getLogger(__name__)

NEWSAPI_URL = "https://newsapi.org/v2/top-headlines"


class _NewsAPISource(BaseModel):
    id: str | None = None
    name: str | None = None


class _NewsAPIArticle(BaseModel):
    source: _NewsAPISource | None = None
    author: str | None = None
    title: str | None = None
    description: str | None = None
    url: str | None = None
    urlToImage: str | None = None
    publishedAt: str | None = None
    content: str | None = None


class NewsAPIProvider:
    """Fetch top headlines from NewsAPI.org.

    Args:
        api_key: NewsAPI key (defaults to NEWS_API_KEY env var).
        country: Country code for headlines (default: "us").
        timeout: HTTP timeout in seconds.
    """

    def __init__(
        self,
        *,
        api_key: str | None = None,
        country: str = "us",
        timeout: float = 30.0,
    ) -> None:
        self._api_key = api_key or os.environ.get("NEWS_API_KEY")
        if not self._api_key:
            raise ConfigurationError(
                "NewsAPI key required. Pass api_key or set NEWS_API_KEY env var."
            )
        self._country = country
        self._timeout = timeout

    async def fetch(
        self,
        category: Category,
        *,
        limit: int = 10,
    ) -> tuple[list[ArticleCandidate], Usage]:
        params: dict[str, str | int] = {
            "country": self._country,
            "category": category.value,
            "pageSize": min(limit, 100),
            "apiKey": self._api_key,  # type: ignore[dict-item]
        }
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            response = await client.get(NEWSAPI_URL, params=params)
            response.raise_for_status()
            data = response.json()

        candidates: list[ArticleCandidate] = []
        for raw in data.get("articles") or []:
            try:
                item = _NewsAPIArticle.model_validate(raw)
            except ValidationError as e:
                logger.debug("Skipping malformed NewsAPI article: %s", e)
                continue
            source = item.source or _NewsAPISource()
            candidates.append(
                ArticleCandidate(
                    title=item.title,
                    description=item.description,
                    url=item.url,
                    published_at=item.publishedAt,
                    source_id=source.id or "newsapi",
                    source_name=source.name or "News API",
                    content=item.content,
                    image_url=item.urlToImage,
                    author=item.author,
                    category=category,
                )
            )
        return (candidates, Usage(news_requests=1))
