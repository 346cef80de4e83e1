"""Tests for data models."""

from datetime import UTC, datetime

import pytest

from newsdesk.data import (
    AnsweredQuestion,
    APICallUsage,
    ArticleSource,
    Category,
    ConversationEntry,
    EntryKind,
    NewsArticle,
    QuestionType,
    QuizResult,
    Usage,
)


def test_category_values() -> None:
    assert [c.value for c in Category] == [
        "general",
        "business",
        "technology",
        "science",
        "health",
    ]


def test_category_label() -> None:
    assert Category.TECHNOLOGY.label == "Technology"


def test_news_article_defaults() -> None:
    article = NewsArticle(
        source=ArticleSource(id="guardian", name="The Guardian"),
        title="Title",
        description="Description...",
        url="https://example.com/a",
        published_at=datetime(2024, 5, 1, tzinfo=UTC),
    )
    assert article.category is Category.GENERAL
    assert article.content == ""
    assert article.image_url is None
    assert article.author is None


def test_news_article_is_frozen() -> None:
    article = NewsArticle(
        source=ArticleSource(id="x", name="X"),
        title="Title",
        description="Description",
        url="https://example.com/a",
        published_at=datetime(2024, 5, 1, tzinfo=UTC),
    )
    with pytest.raises(AttributeError):
        article.title = "Other"  # type: ignore[misc]


def test_conversation_entry_gets_aware_timestamp() -> None:
    entry = ConversationEntry(EntryKind.QUESTION, "Why?")
    assert entry.occurred_at.tzinfo is not None


# -- Quiz answers --


def test_answered_question_is_correct_ignores_case_and_whitespace() -> None:
    answer = AnsweredQuestion(question="Q", user_answer="  true ", correct_answer="True")
    assert answer.is_correct


def test_answered_question_incorrect() -> None:
    answer = AnsweredQuestion(
        question="Q",
        user_answer="Paris",
        correct_answer="Berlin",
        type=QuestionType.FILL_BLANK,
    )
    assert not answer.is_correct


def test_quiz_result_score() -> None:
    result = QuizResult(user_id="u", main_topic="T", total_questions=5, correct_answers=4)
    assert result.score == pytest.approx(0.8)


def test_quiz_result_score_without_questions() -> None:
    result = QuizResult(user_id="u", main_topic="T", total_questions=0, correct_answers=0)
    assert result.score == 0.0


# -- Usage --


def test_usage_token_totals() -> None:
    usage = Usage(
        api_calls=[
            APICallUsage(model="m", input_tokens=100, output_tokens=50),
            APICallUsage(model="m", input_tokens=20, output_tokens=5),
        ]
    )
    assert usage.input_tokens == 120
    assert usage.output_tokens == 55


def test_usage_add() -> None:
    a = Usage(api_calls=[APICallUsage(model="m", input_tokens=1)], news_requests=1)
    b = Usage(speech_characters=42, news_requests=2)
    total = a + b
    assert total.news_requests == 3
    assert total.speech_characters == 42
    assert len(total.api_calls) == 1
    # Operands are left untouched
    assert a.news_requests == 1
    assert b.api_calls == []


def test_usage_iadd_accumulates_in_place() -> None:
    total = Usage()
    total += Usage(news_requests=1)
    total += Usage(api_calls=[APICallUsage(model="m", output_tokens=7)])
    assert total.news_requests == 1
    assert total.output_tokens == 7
