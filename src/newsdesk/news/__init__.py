"""News providers and cross-provider aggregation."""

from newsdesk.news.aggregator import (
    NewsAggregator,
    NewsFeed,
    is_duplicate,
    merge_articles,
    normalize_article,
    parse_category,
    parse_timestamp,
)
from newsdesk.news.article_fetcher import ArticleFetcher, extract_content
from newsdesk.news.base import ArticleCandidate, NewsProvider
from newsdesk.news.guardian import GuardianProvider
from newsdesk.news.mediastack import MediaStackProvider
from newsdesk.news.newsapi import NewsAPIProvider

__all__ = [
    "ArticleCandidate",
    "ArticleFetcher",
    "GuardianProvider",
    "MediaStackProvider",
    "NewsAPIProvider",
    "NewsAggregator",
    "NewsFeed",
    "NewsProvider",
    "extract_content",
    "is_duplicate",
    "merge_articles",
    "normalize_article",
    "parse_category",
    "parse_timestamp",
]
