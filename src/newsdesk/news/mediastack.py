"""MediaStack live news provider."""

import logging
import os

import httpx
from pydantic import BaseModel, ValidationError

from newsdesk.data import Category, Usage
from newsdesk.errors import ConfigurationError
from newsdesk.news.base import ArticleCandidate

logger = logging.getLogger(__name__)

MEDIASTACK_API_URL = "http://api.mediastack.com/v1/news"

REMOVED_MARKER = "[Removed]"


class _MediaStackArticle(BaseModel):
    title: str | None = None
    description: str | None = None
    url: str | None = None
    source: str | None = None
    image: str | None = None
    published_at: str | None = None


class MediaStackProvider:
    """Fetch the latest articles of a MediaStack category.

    Args:
        api_key: MediaStack access key (defaults to MEDIASTACK_API_KEY env var).
        country: Country code filter (default: "us").
        timeout: HTTP timeout in seconds.
    """

    def __init__(
        self,
        *,
        api_key: str | None = None,
        country: str = "us",
        timeout: float = 30.0,
    ) -> None:
        self._api_key = api_key or os.environ.get("MEDIASTACK_API_KEY")
        if not self._api_key:
            raise ConfigurationError(
                "MediaStack API key required. Pass api_key or set MEDIASTACK_API_KEY env var."
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
            "access_key": self._api_key,  # type: ignore[dict-item]
            "countries": self._country,
            "categories": category.value,
            "limit": min(limit, 100),
            "sort": "published_desc",
        }
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            response = await client.get(MEDIASTACK_API_URL, params=params)
            response.raise_for_status()
            data = response.json()

        candidates: list[ArticleCandidate] = []
        for raw in data.get("data") or []:
            try:
                item = _MediaStackArticle.model_validate(raw)
            except ValidationError as e:
                logger.debug("Skipping malformed MediaStack article: %s", e)
                continue
            if not (item.title and item.description and item.url):
                continue
            if REMOVED_MARKER in item.title:
                continue
            candidates.append(
                ArticleCandidate(
                    title=item.title,
                    description=item.description,
                    url=item.url,
                    published_at=item.published_at,
                    source_id="mediastack",
                    source_name=item.source or "MediaStack",
                    content=item.description,
                    image_url=item.image,
                    category=category,
                )
            )
        return (candidates, Usage(news_requests=1))
