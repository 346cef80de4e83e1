"""Fan-out news aggregation with cross-provider de-duplication."""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from datetime import UTC, datetime

from newsdesk.data import ArticleSource, Category, NewsArticle, Usage
from newsdesk.errors import InvalidCategoryError
from newsdesk.news.base import ArticleCandidate, NewsProvider
from newsdesk.run_logger import RunLogger

logger = logging.getLogger(__name__)

DESCRIPTION_MAX_CHARS = 300
FALLBACK_SOURCE_ID = "unknown"
FALLBACK_SOURCE_NAME = "News Source"

# component, candidates, usage, duration, error
_FetchStage = tuple[str, list[ArticleCandidate], Usage | None, float, BaseException | None]


@dataclass
class NewsFeed:
    """Merged, de-duplicated articles for one category, newest first."""

    category: Category
    articles: list[NewsArticle] = field(default_factory=list)
    usage: Usage = field(default_factory=Usage)


def parse_category(value: str | Category | None) -> Category:
    """Resolve a category name, defaulting to ``general``."""
    if value is None or value == "":
        return Category.GENERAL
    try:
        return Category(value)
    except ValueError:
        raise InvalidCategoryError(f"Invalid category: {value!r}") from None


def parse_timestamp(value: str | None) -> datetime | None:
    """Coerce a provider timestamp to an aware UTC datetime, or None if unusable."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def is_complete(candidate: ArticleCandidate) -> bool:
    return bool(
        candidate.title
        and candidate.description
        and candidate.url
        and parse_timestamp(candidate.published_at) is not None
    )


def is_duplicate(candidate: ArticleCandidate, accepted: list[ArticleCandidate]) -> bool:
    """Same url, or either title contains the other (case-insensitive)."""
    title = (candidate.title or "").lower()
    for existing in accepted:
        if existing.url == candidate.url:
            return True
        existing_title = (existing.title or "").lower()
        if title in existing_title or existing_title in title:
            return True
    return False


def normalize_article(
    candidate: ArticleCandidate,
    published_at: datetime,
    *,
    category: Category,
    description_max_chars: int = DESCRIPTION_MAX_CHARS,
) -> NewsArticle:
    """Turn an accepted candidate into a ``NewsArticle``.

    Args:
        candidate: Candidate that passed ``is_complete``.
        published_at: Its parsed publication time.
        category: Requested category, used when the provider gave none.
        description_max_chars: Description length before the ellipsis.
    """
    description = candidate.description or ""
    return NewsArticle(
        source=ArticleSource(
            id=candidate.source_id or FALLBACK_SOURCE_ID,
            name=candidate.source_name or FALLBACK_SOURCE_NAME,
        ),
        title=candidate.title or "",
        description=f"{description[:description_max_chars]}...",
        url=candidate.url or "",
        published_at=published_at,
        content=candidate.content or description,
        category=candidate.category or category,
        image_url=candidate.image_url,
        author=candidate.author,
    )


def merge_articles(
    candidates: list[ArticleCandidate],
    *,
    category: Category,
    description_max_chars: int = DESCRIPTION_MAX_CHARS,
) -> list[NewsArticle]:
    """Filter, de-duplicate, normalize and sort candidates from all providers.

    First occurrence wins. Quadratic in the number of candidates, which stays
    around a few dozen per request.
    """
    accepted: list[ArticleCandidate] = []
    articles: list[NewsArticle] = []
    for candidate in candidates:
        published_at = parse_timestamp(candidate.published_at)
        if published_at is None or not is_complete(candidate):
            continue
        if is_duplicate(candidate, accepted):
            continue
        accepted.append(candidate)
        articles.append(
            normalize_article(
                candidate,
                published_at,
                category=category,
                description_max_chars=description_max_chars,
            )
        )

    articles.sort(key=lambda a: a.published_at, reverse=True)
    return articles


class NewsAggregator:
    """Query every provider in parallel and merge their results.

    A provider that raises contributes no articles; the others are unaffected.

    Args:
        providers: News providers, in merge priority order.
        articles_per_provider: Limit passed to each provider.
        description_max_chars: Truncation length for descriptions.
        run_logger: Optional RunLogger for per-run JSON records.
    """

    def __init__(
        self,
        providers: list[NewsProvider],
        *,
        articles_per_provider: int = 10,
        description_max_chars: int = DESCRIPTION_MAX_CHARS,
        run_logger: RunLogger | None = None,
    ) -> None:
        self._providers = providers
        self._limit = articles_per_provider
        self._description_max_chars = description_max_chars
        self._run_logger = run_logger

    @property
    def providers(self) -> list[NewsProvider]:
        return list(self._providers)

    async def fetch(self, category: str | Category | None = None) -> NewsFeed:
        """Fetch, merge and sort articles for a category.

        Args:
            category: Category name; defaults to ``general``.

        Returns:
            NewsFeed with de-duplicated articles, newest first.

        Raises:
            InvalidCategoryError: If the category is unknown.
        """
        resolved = parse_category(category)
        logger.info("Fetching news from %d providers for %s", len(self._providers), resolved)

        t0 = time.monotonic()
        results = await asyncio.gather(
            *(self._timed_fetch(p, resolved) for p in self._providers),
            return_exceptions=True,
        )
        fetch_duration = time.monotonic() - t0

        total_usage = Usage()
        candidates: list[ArticleCandidate] = []
        stages: list[_FetchStage] = []
        for provider, result in zip(self._providers, results, strict=True):
            component = type(provider).__name__
            if isinstance(result, BaseException):
                logger.warning("Error fetching from %s: %s", component, result)
                stages.append((component, [], None, fetch_duration, result))
                continue
            provider_candidates, usage, duration = result
            logger.debug("%s returned %d articles", component, len(provider_candidates))
            candidates.extend(provider_candidates)
            total_usage += usage
            stages.append((component, provider_candidates, usage, duration, None))

        t0 = time.monotonic()
        articles = merge_articles(
            candidates,
            category=resolved,
            description_max_chars=self._description_max_chars,
        )
        merge_duration = time.monotonic() - t0
        logger.info("Total unique articles: %d (from %d fetched)", len(articles), len(candidates))

        if self._run_logger:
            self._run_logger.start_run("news", {"category": resolved})
            for component, output, usage, duration, error in stages:
                self._run_logger.log_stage(
                    stage="fetch",
                    component=component,
                    input_data={"category": resolved, "limit": self._limit},
                    output_data=output,
                    usage=usage,
                    duration_seconds=duration,
                    error=error,
                )
            self._run_logger.log_stage(
                stage="merge",
                component="title_url_dedup",
                input_data={"candidate_count": len(candidates)},
                output_data={"article_count": len(articles)},
                usage=None,
                duration_seconds=merge_duration,
            )
            self._run_logger.finish_run(articles, total_usage)

        return NewsFeed(category=resolved, articles=articles, usage=total_usage)

    async def _timed_fetch(
        self, provider: NewsProvider, category: Category
    ) -> tuple[list[ArticleCandidate], Usage, float]:
        t0 = time.monotonic()
        candidates, usage = await provider.fetch(category, limit=self._limit)
        return (candidates, usage, time.monotonic() - t0)
