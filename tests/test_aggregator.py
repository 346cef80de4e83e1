"""Tests for news merging and the NewsAggregator."""

import json
from datetime import UTC, datetime
from pathlib import Path

import pytest

from newsdesk.data import Category, Usage
from newsdesk.errors import InvalidCategoryError, ProviderError
from newsdesk.news import (
    ArticleCandidate,
    NewsAggregator,
    is_duplicate,
    merge_articles,
    normalize_article,
    parse_category,
    parse_timestamp,
)
from newsdesk.run_logger import RunLogger

PUBLISHED = datetime(2024, 5, 1, 10, tzinfo=UTC)


def _candidate(
    title: str,
    url: str,
    published_at: str | None = "2024-05-01T10:00:00Z",
    description: str | None = "Some description",
    **kwargs,
) -> ArticleCandidate:
    return ArticleCandidate(
        title=title, url=url, published_at=published_at, description=description, **kwargs
    )


class FakeProvider:
    """Provider that returns canned candidates or raises."""

    def __init__(
        self, candidates: list[ArticleCandidate] | None = None, error: Exception | None = None
    ):
        self.candidates = candidates or []
        self.error = error
        self.calls: list[tuple[Category, int]] = []

    async def fetch(
        self, category: Category, *, limit: int = 10
    ) -> tuple[list[ArticleCandidate], Usage]:
        self.calls.append((category, limit))
        if self.error:
            raise self.error
        return (self.candidates, Usage(news_requests=1))


class TestParsing:
    def test_parse_category_default(self) -> None:
        assert parse_category(None) is Category.GENERAL
        assert parse_category("") is Category.GENERAL

    def test_parse_category_known(self) -> None:
        assert parse_category("science") is Category.SCIENCE

    def test_parse_category_invalid(self) -> None:
        with pytest.raises(InvalidCategoryError, match="sports"):
            parse_category("sports")

    def test_parse_timestamp_zulu(self) -> None:
        assert parse_timestamp("2024-05-01T10:00:00Z") == datetime(2024, 5, 1, 10, tzinfo=UTC)

    def test_parse_timestamp_offset_converted_to_utc(self) -> None:
        parsed = parse_timestamp("2024-05-01T12:00:00+02:00")
        assert parsed == datetime(2024, 5, 1, 10, tzinfo=UTC)

    def test_parse_timestamp_naive_is_utc(self) -> None:
        assert parse_timestamp("2024-05-01T10:00:00") == datetime(2024, 5, 1, 10, tzinfo=UTC)

    def test_parse_timestamp_unusable(self) -> None:
        assert parse_timestamp(None) is None
        assert parse_timestamp("") is None
        assert parse_timestamp("yesterday") is None


class TestMerge:
    def test_is_duplicate_same_url(self) -> None:
        accepted = [_candidate("First", "https://a.com/1")]
        assert is_duplicate(_candidate("Different", "https://a.com/1"), accepted)

    def test_is_duplicate_title_containment_either_way(self) -> None:
        accepted = [_candidate("Breakthroughs in 2024", "https://a.com/1")]
        assert is_duplicate(_candidate("AI breakthroughs in 2024", "https://b.com/2"), accepted)
        accepted = [_candidate("AI breakthroughs in 2024", "https://a.com/1")]
        assert is_duplicate(_candidate("Breakthroughs in 2024", "https://b.com/2"), accepted)

    def test_is_duplicate_unrelated(self) -> None:
        accepted = [_candidate("Markets rally", "https://a.com/1")]
        assert not is_duplicate(_candidate("Storm hits coast", "https://b.com/2"), accepted)

    def test_incomplete_candidates_are_dropped(self) -> None:
        candidates = [
            _candidate("No description", "https://a.com/1", description=None),
            _candidate("No date", "https://a.com/2", published_at=None),
            _candidate("Bad date", "https://a.com/3", published_at="not a date"),
            ArticleCandidate(description="d", url="https://a.com/4", published_at="2024-05-01"),
            _candidate("Complete", "https://a.com/5"),
        ]
        articles = merge_articles(candidates, category=Category.GENERAL)
        assert [a.title for a in articles] == ["Complete"]

    def test_first_occurrence_wins(self) -> None:
        candidates = [
            _candidate("Same story", "https://a.com/1", source_id="first"),
            _candidate("Same story", "https://b.com/2", source_id="second"),
        ]
        articles = merge_articles(candidates, category=Category.GENERAL)
        assert len(articles) == 1
        assert articles[0].source.id == "first"

    def test_sorted_newest_first(self) -> None:
        candidates = [
            _candidate("Old", "https://a.com/1", published_at="2024-05-01T08:00:00Z"),
            _candidate("New", "https://a.com/2", published_at="2024-05-01T12:00:00Z"),
            _candidate("Middle", "https://a.com/3", published_at="2024-05-01T10:00:00Z"),
        ]
        articles = merge_articles(candidates, category=Category.GENERAL)
        assert [a.title for a in articles] == ["New", "Middle", "Old"]

    def test_normalize_truncates_description_and_fills_source(self) -> None:
        article = normalize_article(
            _candidate("Title", "https://a.com/1", description="x" * 500),
            PUBLISHED,
            category=Category.BUSINESS,
        )
        assert article.description == "x" * 300 + "..."
        assert article.source.id == "unknown"
        assert article.source.name == "News Source"
        assert article.published_at == PUBLISHED

    def test_normalize_short_description_still_gets_ellipsis(self) -> None:
        article = normalize_article(
            _candidate("Title", "https://a.com/1", description="Short"),
            PUBLISHED,
            category=Category.GENERAL,
        )
        assert article.description == "Short..."

    def test_normalize_keeps_candidate_category(self) -> None:
        article = normalize_article(
            _candidate("Title", "https://a.com/1", category=Category.HEALTH),
            PUBLISHED,
            category=Category.GENERAL,
        )
        assert article.category is Category.HEALTH


class TestNewsAggregator:
    async def test_merges_all_providers(self) -> None:
        first = FakeProvider([_candidate("Markets rally", "https://a.com/1")])
        second = FakeProvider([_candidate("Storm hits coast", "https://b.com/1")])
        aggregator = NewsAggregator([first, second])

        feed = await aggregator.fetch("business")

        assert feed.category is Category.BUSINESS
        assert {a.title for a in feed.articles} == {"Markets rally", "Storm hits coast"}
        assert feed.usage.news_requests == 2
        assert first.calls == [(Category.BUSINESS, 10)]

    async def test_failing_provider_contributes_nothing(self) -> None:
        good = FakeProvider([_candidate("Markets rally", "https://a.com/1")])
        bad = FakeProvider(error=ProviderError("boom"))
        aggregator = NewsAggregator([bad, good])

        feed = await aggregator.fetch(None)

        assert [a.title for a in feed.articles] == ["Markets rally"]
        assert feed.usage.news_requests == 1

    async def test_all_providers_failing_gives_empty_feed(self) -> None:
        aggregator = NewsAggregator(
            [FakeProvider(error=RuntimeError("a")), FakeProvider(error=ValueError("b"))]
        )
        feed = await aggregator.fetch("science")
        assert feed.articles == []

    async def test_cross_provider_title_dedup_keeps_earlier_provider(self) -> None:
        newsapi = FakeProvider(
            [_candidate("Breakthroughs in 2024", "https://newsapi.example/1", source_id="newsapi")]
        )
        mediastack = FakeProvider(
            [
                _candidate(
                    "AI breakthroughs in 2024",
                    "https://mediastack.example/1",
                    source_id="mediastack",
                )
            ]
        )
        aggregator = NewsAggregator([newsapi, mediastack])

        feed = await aggregator.fetch("technology")

        assert len(feed.articles) == 1
        assert feed.articles[0].source.id == "newsapi"

    async def test_invalid_category_raises_before_fetching(self) -> None:
        provider = FakeProvider()
        aggregator = NewsAggregator([provider])
        with pytest.raises(InvalidCategoryError):
            await aggregator.fetch("sports")
        assert provider.calls == []

    async def test_passes_limit(self) -> None:
        provider = FakeProvider()
        aggregator = NewsAggregator([provider], articles_per_provider=3)
        await aggregator.fetch("health")
        assert provider.calls == [(Category.HEALTH, 3)]

    async def test_writes_run_log(self, tmp_path: Path) -> None:
        run_logger = RunLogger(log_dir=tmp_path)
        aggregator = NewsAggregator(
            [
                FakeProvider([_candidate("Markets rally", "https://a.com/1")]),
                FakeProvider(error=ProviderError("boom")),
            ],
            run_logger=run_logger,
        )

        await aggregator.fetch("business")

        assert run_logger.last_log_path is not None
        data = json.loads(run_logger.last_log_path.read_text())
        assert data["run_type"] == "news"
        assert data["request"] == {"category": "business"}
        assert data["final_item_count"] == 1
        stages = data["stages"]
        assert [s["stage"] for s in stages] == ["fetch", "fetch", "merge"]
        assert stages[0]["error"] is None
        assert stages[1]["error"] == "boom"
        assert stages[2]["output"] == {"article_count": 1}
