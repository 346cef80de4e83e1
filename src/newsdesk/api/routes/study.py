"""Study tool routes: explanations, quizzes, flashcards and concepts."""

from fastapi import APIRouter

from newsdesk.api.schemas import (
    ConceptOut,
    ConceptsOut,
    ExplanationOut,
    FlashcardOut,
    FlashcardsOut,
    QuizExplanationRequest,
    QuizOut,
    TextRequest,
)
from newsdesk.config import Services
from newsdesk.study import ClaudeStudyTools


def create_study_router(services: Services) -> APIRouter:
    """Create study router."""
    router = APIRouter(prefix="/api/study", tags=["study"])

    def tools() -> ClaudeStudyTools:
        return services.require("study_tools")

    @router.post("/explain", response_model=ExplanationOut)
    async def explain(request: TextRequest) -> ExplanationOut:
        explanation, _usage = await tools().explain(request.text)
        return ExplanationOut(explanation=explanation)

    @router.post("/quiz", response_model=QuizOut)
    async def generate_quiz(request: TextRequest) -> QuizOut:
        quiz, _usage = await tools().generate_quiz(request.text)
        return QuizOut.from_quiz(quiz)

    @router.post("/quiz-explanation", response_model=ExplanationOut)
    async def explain_quiz(request: QuizExplanationRequest) -> ExplanationOut:
        explanation, _usage = await tools().explain_quiz_results(
            request.main_topic, [a.to_answer() for a in request.answers]
        )
        return ExplanationOut(explanation=explanation)

    @router.post("/flashcards", response_model=FlashcardsOut)
    async def generate_flashcards(request: TextRequest) -> FlashcardsOut:
        cards, _usage = await tools().generate_flashcards(request.text)
        return FlashcardsOut(flashcards=[FlashcardOut.from_flashcard(c) for c in cards])

    @router.post("/concepts", response_model=ConceptsOut)
    async def identify_concepts(request: TextRequest) -> ConceptsOut:
        concepts, _usage = await tools().identify_concepts(request.text)
        return ConceptsOut(concepts=[ConceptOut.from_concept(c) for c in concepts])

    return router
