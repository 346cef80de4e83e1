"""Request and response bodies of the HTTP API.

Field names are snake_case in Python and camelCase on the wire.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from newsdesk.data import (
    AnsweredQuestion,
    Bookmark,
    Category,
    Concept,
    ConversationEntry,
    DiscussionSummary,
    Flashcard,
    NewsArticle,
    QuestionType,
    Quiz,
    QuizResult,
    UserProgress,
)


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================
# News
# ============================================================


class SourceOut(ApiModel):
    id: str
    name: str


class ArticleOut(ApiModel):
    source: SourceOut
    author: str | None
    title: str
    description: str
    url: str
    url_to_image: str | None
    published_at: datetime
    content: str
    category: Category

    @classmethod
    def from_article(cls, article: NewsArticle) -> "ArticleOut":
        return cls(
            source=SourceOut(id=article.source.id, name=article.source.name),
            author=article.author,
            title=article.title,
            description=article.description,
            url=article.url,
            url_to_image=article.image_url,
            published_at=article.published_at,
            content=article.content,
            category=article.category,
        )


class CategoryOut(ApiModel):
    id: Category
    label: str


class NewsOut(ApiModel):
    status: str = "ok"
    total_results: int
    articles: list[ArticleOut]
    categories: list[CategoryOut]


class ArticleRequest(ApiModel):
    url: str = ""


class ArticleContentOut(ApiModel):
    content: str


# ============================================================
# Discussions
# ============================================================


class StartDiscussionRequest(ApiModel):
    subject_id: str = "anonymous"
    article_text: str
    highlighted_text: str | None = None


class DiscussionOut(ApiModel):
    discussion_id: str
    question: str
    discussion: str | None
    audio_url: str
    state: str


class TurnOut(ApiModel):
    transcript: str | None
    acknowledgment: str | None
    follow_up_question: str
    audio_url: str
    state: str


class TextAnswerRequest(ApiModel):
    text: str


class PlaybackRequest(ApiModel):
    event: str = Field(pattern="^(ended|toggle)$")


class PlaybackOut(ApiModel):
    state: str
    playing: bool


class EntryOut(ApiModel):
    type: str
    text: str
    timestamp: datetime

    @classmethod
    def from_entry(cls, entry: ConversationEntry) -> "EntryOut":
        return cls(type=entry.kind.value, text=entry.text, timestamp=entry.occurred_at)


class DiscussionStatusOut(ApiModel):
    discussion_id: str
    state: str
    topic: str
    question: str | None
    transcript: str
    playing: bool
    entries: list[EntryOut]


class DiscussionClosedOut(ApiModel):
    status: str = "ok"
    history_id: str | None


class SummaryOut(ApiModel):
    user_id: str
    topic: str
    timestamp: datetime
    entries: list[EntryOut]
    total_exchanges: int

    @classmethod
    def from_summary(cls, summary: DiscussionSummary) -> "SummaryOut":
        return cls(
            user_id=summary.subject_id,
            topic=summary.topic,
            timestamp=summary.created_at,
            entries=[EntryOut.from_entry(e) for e in summary.entries],
            total_exchanges=summary.exchange_count,
        )


class DiscussionListOut(ApiModel):
    discussions: list[SummaryOut]


# ============================================================
# Study tools
# ============================================================


class TextRequest(ApiModel):
    text: str = ""


class ExplanationOut(ApiModel):
    explanation: str


class QuestionOut(ApiModel):
    id: str
    type: QuestionType
    question: str
    options: list[str]
    correct_answer: str


class QuizOut(ApiModel):
    main_topic: str
    questions: list[QuestionOut]

    @classmethod
    def from_quiz(cls, quiz: Quiz) -> "QuizOut":
        return cls(
            main_topic=quiz.main_topic,
            questions=[
                QuestionOut(
                    id=q.id,
                    type=q.type,
                    question=q.question,
                    options=list(q.options),
                    correct_answer=q.correct_answer,
                )
                for q in quiz.questions
            ],
        )


class AnswerIn(ApiModel):
    question: str
    user_answer: str
    correct_answer: str
    type: QuestionType = QuestionType.MULTIPLE_CHOICE

    def to_answer(self) -> AnsweredQuestion:
        return AnsweredQuestion(
            question=self.question,
            user_answer=self.user_answer,
            correct_answer=self.correct_answer,
            type=self.type,
        )


class QuizExplanationRequest(ApiModel):
    main_topic: str = ""
    answers: list[AnswerIn] = Field(default_factory=list)


class FlashcardOut(ApiModel):
    id: str
    front: str
    back: str
    category: str

    @classmethod
    def from_flashcard(cls, card: Flashcard) -> "FlashcardOut":
        return cls(id=card.id, front=card.front, back=card.back, category=card.category)


class FlashcardsOut(ApiModel):
    flashcards: list[FlashcardOut]


class ConceptOut(ApiModel):
    text: str
    type: str
    start_index: int
    end_index: int

    @classmethod
    def from_concept(cls, concept: Concept) -> "ConceptOut":
        return cls(
            text=concept.text,
            type=concept.type.value,
            start_index=concept.start_index,
            end_index=concept.end_index,
        )


class ConceptsOut(ApiModel):
    concepts: list[ConceptOut]


# ============================================================
# Reader library
# ============================================================


class BookmarkRequest(ApiModel):
    text: str
    explanation: str = ""


class BookmarkOut(ApiModel):
    id: str
    user_id: str
    text: str
    explanation: str
    created_at: datetime

    @classmethod
    def from_bookmark(cls, bookmark: Bookmark) -> "BookmarkOut":
        return cls(
            id=bookmark.id,
            user_id=bookmark.user_id,
            text=bookmark.text,
            explanation=bookmark.explanation,
            created_at=bookmark.created_at,
        )


class BookmarkListOut(ApiModel):
    bookmarks: list[BookmarkOut]


class QuizResultRequest(ApiModel):
    main_topic: str
    questions: list[AnswerIn]


class QuizResultOut(ApiModel):
    id: str | None
    main_topic: str
    total_questions: int
    correct_answers: int
    score: float
    created_at: datetime

    @classmethod
    def from_result(cls, result: QuizResult) -> "QuizResultOut":
        return cls(
            id=result.id,
            main_topic=result.main_topic,
            total_questions=result.total_questions,
            correct_answers=result.correct_answers,
            score=result.score,
            created_at=result.created_at,
        )


class ProgressOut(ApiModel):
    quiz_results: list[QuizResultOut]
    total_quizzes: int
    average_score: float
    total_bookmarks: int
    recent_topics: list[str]

    @classmethod
    def from_progress(cls, progress: UserProgress) -> "ProgressOut":
        return cls(
            quiz_results=[QuizResultOut.from_result(r) for r in progress.quiz_results],
            total_quizzes=progress.total_quizzes,
            average_score=progress.average_score,
            total_bookmarks=progress.total_bookmarks,
            recent_topics=list(progress.recent_topics),
        )
