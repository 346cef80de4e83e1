"""Core data models for newsdesk."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum


def utc_now() -> datetime:
    return datetime.now(tz=UTC)


class Category(StrEnum):
    """News categories offered to readers."""

    GENERAL = "general"
    BUSINESS = "business"
    TECHNOLOGY = "technology"
    SCIENCE = "science"
    HEALTH = "health"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class EntryKind(StrEnum):
    """Who said what in a spoken discussion."""

    QUESTION = "question"
    RESPONSE = "response"
    ACKNOWLEDGMENT = "acknowledgment"


class QuestionType(StrEnum):
    MULTIPLE_CHOICE = "multiple-choice"
    TRUE_FALSE = "true-false"
    FILL_BLANK = "fill-blank"


class ConceptType(StrEnum):
    """Categories for interactive concepts highlighted in an article."""

    ENTITY = "ENTITY"
    TERM = "TERM"
    EVENT = "EVENT"
    CONCEPT = "CONCEPT"
    PHRASE = "PHRASE"


# ============================================================
# News
# ============================================================


@dataclass(frozen=True)
class ArticleSource:
    """Publisher of an article as reported by a news provider."""

    id: str
    name: str


@dataclass(frozen=True)
class NewsArticle:
    """A news article produced by a provider fetch.

    ``url`` doubles as the de-duplication key across providers.
    """

    source: ArticleSource
    title: str
    description: str
    url: str
    published_at: datetime
    content: str = ""
    category: Category = Category.GENERAL
    image_url: str | None = None
    author: str | None = None


# ============================================================
# Discussions
# ============================================================


@dataclass(frozen=True)
class ConversationEntry:
    """One immutable line of a spoken discussion."""

    kind: EntryKind
    text: str
    occurred_at: datetime = field(default_factory=utc_now)


@dataclass(frozen=True)
class DiscussionSummary:
    """What gets persisted when a discussion ends or restarts."""

    subject_id: str
    topic: str
    entries: tuple[ConversationEntry, ...]
    exchange_count: int
    created_at: datetime = field(default_factory=utc_now)


@dataclass(frozen=True)
class DiscussionOpening:
    """LLM output that opens a discussion about a text."""

    discussion: str
    question: str


@dataclass(frozen=True)
class Evaluation:
    """LLM output that reacts to a spoken answer."""

    acknowledgment: str
    follow_up_question: str


@dataclass(frozen=True)
class DiscussionTurn:
    """Result of a completed coordinator step, ready to be played back."""

    question: str
    audio: bytes
    discussion: str | None = None
    acknowledgment: str | None = None
    transcript: str | None = None


# ============================================================
# Study tools
# ============================================================


@dataclass(frozen=True)
class QuizQuestion:
    id: str
    type: QuestionType
    question: str
    correct_answer: str
    options: tuple[str, ...] = ()


@dataclass(frozen=True)
class Quiz:
    main_topic: str
    questions: tuple[QuizQuestion, ...]


@dataclass(frozen=True)
class AnsweredQuestion:
    """A quiz question together with what the reader answered."""

    question: str
    user_answer: str
    correct_answer: str
    type: QuestionType = QuestionType.MULTIPLE_CHOICE

    @property
    def is_correct(self) -> bool:
        return self.user_answer.strip().lower() == self.correct_answer.strip().lower()


@dataclass(frozen=True)
class Flashcard:
    id: str
    front: str
    back: str
    category: str = "main-idea"


@dataclass(frozen=True)
class Concept:
    """A phrase worth explaining, located by character offsets in the source text."""

    text: str
    type: ConceptType
    start_index: int
    end_index: int


# ============================================================
# Reader library
# ============================================================


@dataclass(frozen=True)
class Bookmark:
    id: str
    user_id: str
    text: str
    explanation: str
    created_at: datetime


@dataclass(frozen=True)
class QuizResult:
    user_id: str
    main_topic: str
    total_questions: int
    correct_answers: int
    questions: tuple[AnsweredQuestion, ...] = ()
    id: str | None = None
    created_at: datetime = field(default_factory=utc_now)

    @property
    def score(self) -> float:
        if not self.total_questions:
            return 0.0
        return self.correct_answers / self.total_questions


@dataclass(frozen=True)
class UserProgress:
    quiz_results: tuple[QuizResult, ...]
    total_quizzes: int
    average_score: float
    total_bookmarks: int
    recent_topics: tuple[str, ...]


# ============================================================
# Usage accounting
# ============================================================


@dataclass(frozen=True)
class APICallUsage:
    """Usage from a single LLM call."""

    model: str
    input_tokens: int = 0
    output_tokens: int = 0
    cache_creation_input_tokens: int = 0
    cache_read_input_tokens: int = 0


@dataclass
class Usage:
    """Accumulated external-service usage across components."""

    api_calls: list[APICallUsage] = field(default_factory=list)
    news_requests: int = 0
    speech_characters: int = 0

    @property
    def input_tokens(self) -> int:
        return sum(c.input_tokens for c in self.api_calls)

    @property
    def output_tokens(self) -> int:
        return sum(c.output_tokens for c in self.api_calls)

    def __add__(self, other: "Usage") -> "Usage":
        return Usage(
            api_calls=self.api_calls + other.api_calls,
            news_requests=self.news_requests + other.news_requests,
            speech_characters=self.speech_characters + other.speech_characters,
        )

    def __iadd__(self, other: "Usage") -> "Usage":
        self.api_calls.extend(other.api_calls)
        self.news_requests += other.news_requests
        self.speech_characters += other.speech_characters
        return self
