"""Data models for newsdesk."""

from newsdesk.data.models import (
    AnsweredQuestion,
    APICallUsage,
    ArticleSource,
    Bookmark,
    Category,
    Concept,
    ConceptType,
    ConversationEntry,
    DiscussionOpening,
    DiscussionSummary,
    DiscussionTurn,
    EntryKind,
    Evaluation,
    Flashcard,
    NewsArticle,
    QuestionType,
    Quiz,
    QuizQuestion,
    QuizResult,
    Usage,
    UserProgress,
    utc_now,
)

__all__ = [
    "APICallUsage",
    "AnsweredQuestion",
    "ArticleSource",
    "Bookmark",
    "Category",
    "Concept",
    "ConceptType",
    "ConversationEntry",
    "DiscussionOpening",
    "DiscussionSummary",
    "DiscussionTurn",
    "EntryKind",
    "Evaluation",
    "Flashcard",
    "NewsArticle",
    "QuestionType",
    "Quiz",
    "QuizQuestion",
    "QuizResult",
    "Usage",
    "UserProgress",
    "utc_now",
]
