"""The Guardian content API provider."""

import logging
import os

import httpx
from pydantic import BaseModel, ValidationError

from newsdesk.data import Category, Usage
from newsdesk.errors import ConfigurationError
from newsdesk.news.base import ArticleCandidate

logger = logging.getLogger(__name__)

GUARDIAN_API_URL = "https://content.guardianapis.com/search"

SECTIONS: dict[Category, str] = {
    Category.GENERAL: "news",
    Category.BUSINESS: "business",
    Category.TECHNOLOGY: "technology",
    Category.SCIENCE: "science",
    Category.HEALTH: "healthcare",
}

DESCRIPTION_PREVIEW_CHARS = 200


class _GuardianFields(BaseModel):
    thumbnail: str | None = None
    bodyText: str | None = None
    byline: str | None = None


class _GuardianResult(BaseModel):
    webTitle: str | None = None
    webUrl: str | None = None
    webPublicationDate: str | None = None
    fields: _GuardianFields | None = None


class GuardianProvider:
    """Fetch the newest articles of a Guardian section.

    Args:
        api_key: Guardian API key (defaults to GUARDIAN_API_KEY env var).
        timeout: HTTP timeout in seconds.
    """

    def __init__(self, *, api_key: str | None = None, timeout: float = 30.0) -> None:
        self._api_key = api_key or os.environ.get("GUARDIAN_API_KEY")
        if not self._api_key:
            raise ConfigurationError(
                "Guardian API key required. Pass api_key or set GUARDIAN_API_KEY env var."
            )
        self._timeout = timeout

    async def fetch(
        self,
        category: Category,
        *,
        limit: int = 10,
    ) -> tuple[list[ArticleCandidate], Usage]:
        params: dict[str, str | int] = {
            "api-key": self._api_key,  # type: ignore[dict-item]
            "section": SECTIONS[category],
            "show-fields": "thumbnail,bodyText,byline",
            "page-size": min(limit, 50),
            "order-by": "newest",
        }
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            response = await client.get(GUARDIAN_API_URL, params=params)
            response.raise_for_status()
            data = response.json()

        results = (data.get("response") or {}).get("results") or []
        candidates: list[ArticleCandidate] = []
        for raw in results:
            try:
                item = _GuardianResult.model_validate(raw)
            except ValidationError as e:
                logger.debug("Skipping malformed Guardian result: %s", e)
                continue
            fields = item.fields or _GuardianFields()
            body = fields.bodyText or ""
            candidates.append(
                ArticleCandidate(
                    title=item.webTitle,
                    description=f"{body[:DESCRIPTION_PREVIEW_CHARS]}..." if body else None,
                    url=item.webUrl,
                    published_at=item.webPublicationDate,
                    source_id="guardian",
                    source_name="The Guardian",
                    content=body or item.webTitle,
                    image_url=fields.thumbnail,
                    author=fields.byline,
                    category=category,
                )
            )
        return (candidates, Usage(news_requests=1))
