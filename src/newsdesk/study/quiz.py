"""Validation of LLM-generated quizzes."""

from typing import Any

from newsdesk.data import QuestionType, Quiz, QuizQuestion
from newsdesk.errors import MalformedResponseError

DEFAULT_MAIN_TOPIC = "Quiz Topic"
MULTIPLE_CHOICE_OPTIONS = 4


def _normalize_question(raw: Any, index: int) -> QuizQuestion:
    """Repair or reject one generated question.

    Missing ids and unknown types are filled in; missing text or answers are
    fatal because the question would be unusable.
    """
    if not isinstance(raw, dict):
        raise MalformedResponseError(f"Question {index + 1} is not an object")

    question_id = str(raw.get("id") or f"q{index + 1}")

    try:
        question_type = QuestionType(raw.get("type"))
    except ValueError:
        question_type = QuestionType.MULTIPLE_CHOICE

    text = raw.get("question")
    if not text:
        raise MalformedResponseError(f"Question {index + 1} is missing question text")

    correct_answer = raw.get("correctAnswer")
    if not correct_answer:
        raise MalformedResponseError(f"Question {index + 1} is missing correct answer")
    correct_answer = str(correct_answer)

    options: tuple[str, ...] = ()
    if question_type is QuestionType.MULTIPLE_CHOICE:
        raw_options = raw.get("options")
        if not isinstance(raw_options, list) or len(raw_options) != MULTIPLE_CHOICE_OPTIONS:
            raise MalformedResponseError(
                f"Question {index + 1} must have exactly {MULTIPLE_CHOICE_OPTIONS} options"
            )
        option_list = [str(o) for o in raw_options]
        if correct_answer not in option_list:
            option_list[-1] = correct_answer
        options = tuple(option_list)
    elif question_type is QuestionType.TRUE_FALSE:
        correct_answer = "True" if correct_answer.strip().lower() == "true" else "False"

    return QuizQuestion(
        id=question_id,
        type=question_type,
        question=str(text),
        correct_answer=correct_answer,
        options=options,
    )


def validate_quiz(payload: dict[str, Any]) -> Quiz:
    """Build a ``Quiz`` from the parsed JSON reply.

    Raises:
        MalformedResponseError: If the question list is missing or a question
            cannot be repaired.
    """
    questions = payload.get("questions")
    if not isinstance(questions, list):
        raise MalformedResponseError("Invalid response format: missing questions array")

    return Quiz(
        main_topic=str(payload.get("mainTopic") or DEFAULT_MAIN_TOPIC),
        questions=tuple(_normalize_question(q, i) for i, q in enumerate(questions)),
    )
