"""Reader library persisted in a DocumentStore: discussions, bookmarks, quiz results."""

import logging
from datetime import UTC, datetime
from typing import Any

from newsdesk.data import (
    AnsweredQuestion,
    Bookmark,
    ConversationEntry,
    DiscussionSummary,
    EntryKind,
    QuestionType,
    QuizResult,
    UserProgress,
    utc_now,
)
from newsdesk.storage.base import Document, DocumentStore

logger = logging.getLogger(__name__)

DISCUSSIONS = "discussions"
BOOKMARKS = "bookmarks"
QUIZ_RESULTS = "quizResults"

RECENT_TOPICS = 5


def _dump_time(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat(timespec="microseconds")


def _load_time(value: str | None) -> datetime:
    if not value:
        return utc_now()
    parsed = datetime.fromisoformat(value)
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


def _summary_to_document(summary: DiscussionSummary) -> dict[str, Any]:
    return {
        "userId": summary.subject_id,
        "timestamp": _dump_time(summary.created_at),
        "topic": summary.topic,
        "entries": [
            {"type": e.kind.value, "text": e.text, "timestamp": _dump_time(e.occurred_at)}
            for e in summary.entries
        ],
        "totalExchanges": summary.exchange_count,
    }


def _document_to_summary(doc: Document) -> DiscussionSummary:
    data = doc.data
    return DiscussionSummary(
        subject_id=data["userId"],
        topic=data.get("topic", ""),
        entries=tuple(
            ConversationEntry(
                kind=EntryKind(e["type"]),
                text=e["text"],
                occurred_at=_load_time(e.get("timestamp")),
            )
            for e in data.get("entries", [])
        ),
        exchange_count=int(data.get("totalExchanges", 0)),
        created_at=_load_time(data.get("timestamp")),
    )


class DiscussionHistory:
    """Archive of finished spoken discussions."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    async def save(self, summary: DiscussionSummary) -> str:
        doc_id = await self._store.add(DISCUSSIONS, _summary_to_document(summary))
        logger.info(
            "Discussion history saved for %s (%d entries)",
            summary.subject_id,
            len(summary.entries),
        )
        return doc_id

    async def recent(self, subject_id: str, limit: int = 5) -> list[DiscussionSummary]:
        docs = await self._store.query(
            DISCUSSIONS,
            where={"userId": subject_id},
            order_by="timestamp",
            descending=True,
            limit=limit,
        )
        return [_document_to_summary(d) for d in docs]


class BookmarkRepository:
    """Saved excerpts and their explanations."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    async def add(self, user_id: str, text: str, explanation: str) -> Bookmark:
        created_at = utc_now()
        doc_id = await self._store.add(
            BOOKMARKS,
            {
                "userId": user_id,
                "text": text,
                "explanation": explanation,
                "createdAt": _dump_time(created_at),
            },
        )
        return Bookmark(
            id=doc_id, user_id=user_id, text=text, explanation=explanation, created_at=created_at
        )

    async def list_for(self, user_id: str) -> list[Bookmark]:
        docs = await self._store.query(
            BOOKMARKS, where={"userId": user_id}, order_by="createdAt", descending=True
        )
        return [
            Bookmark(
                id=d.id,
                user_id=d.data["userId"],
                text=d.data["text"],
                explanation=d.data.get("explanation", ""),
                created_at=_load_time(d.data.get("createdAt")),
            )
            for d in docs
        ]

    async def remove(self, user_id: str, bookmark_id: str) -> bool:
        doc = await self._store.get(BOOKMARKS, bookmark_id)
        if doc is None or doc.data.get("userId") != user_id:
            return False
        return await self._store.delete(BOOKMARKS, bookmark_id)

    async def find(self, user_id: str, text: str) -> str | None:
        """Return the id of the user's bookmark for ``text``, if any."""
        docs = await self._store.query(BOOKMARKS, where={"userId": user_id, "text": text}, limit=1)
        return docs[0].id if docs else None

    async def count(self, user_id: str) -> int:
        return await self._store.count(BOOKMARKS, where={"userId": user_id})


def _result_to_document(result: QuizResult) -> dict[str, Any]:
    return {
        "userId": result.user_id,
        "mainTopic": result.main_topic,
        "totalQuestions": result.total_questions,
        "correctAnswers": result.correct_answers,
        "createdAt": _dump_time(result.created_at),
        "questions": [
            {
                "question": q.question,
                "userAnswer": q.user_answer,
                "correctAnswer": q.correct_answer,
                "type": q.type.value,
                "isCorrect": q.is_correct,
            }
            for q in result.questions
        ],
    }


def _document_to_result(doc: Document) -> QuizResult:
    data = doc.data
    return QuizResult(
        id=doc.id,
        user_id=data["userId"],
        main_topic=data.get("mainTopic", ""),
        total_questions=int(data.get("totalQuestions", 0)),
        correct_answers=int(data.get("correctAnswers", 0)),
        created_at=_load_time(data.get("createdAt")),
        questions=tuple(
            AnsweredQuestion(
                question=q.get("question", ""),
                user_answer=q.get("userAnswer", ""),
                correct_answer=q.get("correctAnswer", ""),
                type=QuestionType(q.get("type", QuestionType.MULTIPLE_CHOICE.value)),
            )
            for q in data.get("questions", [])
        ),
    )


class ProgressRepository:
    """Quiz results and the progress summary derived from them."""

    def __init__(self, store: DocumentStore, bookmarks: BookmarkRepository) -> None:
        self._store = store
        self._bookmarks = bookmarks

    async def save_quiz_result(self, result: QuizResult) -> str:
        doc_id = await self._store.add(QUIZ_RESULTS, _result_to_document(result))
        logger.info(
            "Quiz result saved for %s: %d/%d",
            result.user_id,
            result.correct_answers,
            result.total_questions,
        )
        return doc_id

    async def get_progress(self, user_id: str) -> UserProgress:
        docs = await self._store.query(
            QUIZ_RESULTS, where={"userId": user_id}, order_by="createdAt", descending=True
        )
        results = tuple(_document_to_result(d) for d in docs)
        average = sum(r.score for r in results) / len(results) if results else 0.0
        return UserProgress(
            quiz_results=results,
            total_quizzes=len(results),
            average_score=average,
            total_bookmarks=await self._bookmarks.count(user_id),
            recent_topics=tuple(r.main_topic for r in results[:RECENT_TOPICS]),
        )
