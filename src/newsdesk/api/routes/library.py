"""Per-reader library routes: bookmarks, quiz results, progress and discussion history."""

from dataclasses import replace

from fastapi import APIRouter, HTTPException, Query

from newsdesk.api.schemas import (
    BookmarkListOut,
    BookmarkOut,
    BookmarkRequest,
    DiscussionListOut,
    ProgressOut,
    QuizResultOut,
    QuizResultRequest,
    SummaryOut,
)
from newsdesk.config import Services
from newsdesk.data import QuizResult
from newsdesk.errors import EmptyInputError


def create_library_router(services: Services) -> APIRouter:
    """Create library router."""
    router = APIRouter(prefix="/api/users/{user_id}", tags=["library"])

    @router.get("/bookmarks", response_model=BookmarkListOut)
    async def list_bookmarks(user_id: str) -> BookmarkListOut:
        bookmarks = await services.bookmarks.list_for(user_id)
        return BookmarkListOut(bookmarks=[BookmarkOut.from_bookmark(b) for b in bookmarks])

    @router.post("/bookmarks", response_model=BookmarkOut, status_code=201)
    async def add_bookmark(user_id: str, request: BookmarkRequest) -> BookmarkOut:
        if not request.text.strip():
            raise EmptyInputError("Bookmark text is required")
        bookmark = await services.bookmarks.add(user_id, request.text, request.explanation)
        return BookmarkOut.from_bookmark(bookmark)

    @router.delete("/bookmarks/{bookmark_id}")
    async def remove_bookmark(user_id: str, bookmark_id: str) -> dict:
        if not await services.bookmarks.remove(user_id, bookmark_id):
            raise HTTPException(status_code=404, detail=f"Unknown bookmark: {bookmark_id}")
        return {"status": "ok"}

    @router.post("/quiz-results", response_model=QuizResultOut, status_code=201)
    async def save_quiz_result(user_id: str, request: QuizResultRequest) -> QuizResultOut:
        answers = tuple(q.to_answer() for q in request.questions)
        result = QuizResult(
            user_id=user_id,
            main_topic=request.main_topic,
            total_questions=len(answers),
            correct_answers=sum(1 for a in answers if a.is_correct),
            questions=answers,
        )
        result_id = await services.progress.save_quiz_result(result)
        return QuizResultOut.from_result(replace(result, id=result_id))

    @router.get("/progress", response_model=ProgressOut)
    async def get_progress(user_id: str) -> ProgressOut:
        return ProgressOut.from_progress(await services.progress.get_progress(user_id))

    @router.get("/discussions", response_model=DiscussionListOut)
    async def recent_discussions(
        user_id: str, limit: int = Query(default=5, ge=1, le=50)
    ) -> DiscussionListOut:
        summaries = await services.history.recent(user_id, limit=limit)
        return DiscussionListOut(discussions=[SummaryOut.from_summary(s) for s in summaries])

    return router
