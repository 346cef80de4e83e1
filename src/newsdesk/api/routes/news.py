"""Headline and article routes."""

import logging

from fastapi import APIRouter

from newsdesk.api.schemas import (
    ArticleContentOut,
    ArticleOut,
    ArticleRequest,
    CategoryOut,
    NewsOut,
)
from newsdesk.config import Services
from newsdesk.data import Category

logger = logging.getLogger(__name__)


def create_news_router(services: Services) -> APIRouter:
    """Create news router."""
    router = APIRouter(prefix="/api/news", tags=["news"])

    @router.get("", response_model=NewsOut)
    async def get_news(category: str | None = None) -> NewsOut:
        """Merged, deduplicated headlines for a category, newest first."""
        feed = await services.aggregator.fetch(category)
        return NewsOut(
            total_results=len(feed.articles),
            articles=[ArticleOut.from_article(a) for a in feed.articles],
            categories=[CategoryOut(id=c, label=c.label) for c in Category],
        )

    @router.post("/article", response_model=ArticleContentOut)
    async def fetch_article(request: ArticleRequest) -> ArticleContentOut:
        """Readable text of an article page."""
        content = await services.fetcher.fetch(request.url)
        return ArticleContentOut(content=content)

    return router
