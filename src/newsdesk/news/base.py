from typing import Protocol

from pydantic import BaseModel

from newsdesk.data import Category, Usage


class ArticleCandidate(BaseModel):
    """An article as a provider reported it, before merge and normalization.

    Any field may be missing; the aggregator drops incomplete candidates.
    """

    title: str | None = None
    description: str | None = None
    url: str | None = None
    published_at: str | None = None
    source_id: str | None = None
    source_name: str | None = None
    content: str | None = None
    image_url: str | None = None
    author: str | None = None
    category: Category = Category.GENERAL

    model_config = {"frozen": True}


class NewsProvider(Protocol):
    """Interface for a read-only news-listing API."""

    async def fetch(
        self,
        category: Category,
        *,
        limit: int = 10,
    ) -> tuple[list[ArticleCandidate], Usage]:
        """Fetch the latest articles for one category.

        Args:
            category: Category to list.
            limit: Maximum number of articles to request.

        Returns:
            Tuple of (candidates in provider order, usage).
        """
        ...
