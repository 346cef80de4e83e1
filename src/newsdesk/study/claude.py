"""Claude-backed study tools: explanations, quizzes, flashcards and concepts."""

import logging
from typing import Any

import anthropic

from newsdesk.data import AnsweredQuestion, Concept, Flashcard, Quiz, Usage
from newsdesk.errors import EmptyInputError, ProviderError
from newsdesk.generation.claude_output import (
    DEFAULT_MODEL,
    create_client,
    parse_json_object,
    response_text,
    usage_from_response,
)
from newsdesk.study.concepts import locate_concepts
from newsdesk.study.flashcards import validate_flashcards
from newsdesk.study.quiz import validate_quiz

logger = logging.getLogger(__name__)

QUIZ_PROMPT = """\
Analyze the following text and create a quiz with 5 questions.

1. The FIRST question must be a multiple-choice question about the main topic \
or central idea of the text.
2. Then create another multiple-choice question about a specific detail, two \
true/false questions about supporting ideas, and one fill-in-the-blank \
question about a key term or concept.

Multiple-choice questions have exactly 4 distinct options in random order, and \
"correctAnswer" must be copied word for word from one of them. True/false \
answers are "True" or "False". Fill-in-the-blank questions contain a blank \
(___) and have a single word or very short phrase from the text as answer.

Every question has "id" (q1..q5), "type" (multiple-choice, true-false or \
fill-blank), "question" and "correctAnswer"; multiple-choice questions also \
have "options".

Respond ONLY with a JSON object:
{"mainTopic": "Brief description of the text's main topic", "questions": [...]}\
"""

FLASHCARD_PROMPT = """\
You create flashcards STRICTLY based on the provided article content. Do NOT \
include information from outside the article.

Card 1 covers the main thesis, cards 2-3 key supporting points, cards 4-5 \
specific details or examples from the article. The front is a clear, specific \
question; the back answers it using only the article.

Respond ONLY with a JSON object:
{"flashcards": [{"id": "1", "front": "...", "back": "...", \
"category": "main-idea" | "key-point" | "detail"}]}\
"""

CONCEPT_PROMPT = """\
You are a concept identification system. Identify the important concepts in \
the text that should be interactive for a reader: complete multi-word \
concepts, technical terms, full names of people, organizations and places, \
dates and historical events, scientific processes and key phrases.

Categorize each as ENTITY, TERM, EVENT, CONCEPT or PHRASE. Return EXACT text \
matches from the original text; do not modify or paraphrase.

Respond ONLY with a JSON object:
{"concepts": [{"text": "exact phrase from text", "type": "category"}]}\
"""


def _format_answers(main_topic: str, answers: list[AnsweredQuestion]) -> str:
    lines = [
        f'Analyze these incorrect quiz answers about "{main_topic}" and provide a '
        "helpful explanation.",
        "",
        "Questions and Answers:",
    ]
    for i, answer in enumerate(answers, 1):
        lines.append(f"{i}. Question: {answer.question}")
        lines.append(f"   User's Answer: {answer.user_answer}")
        lines.append(f"   Correct Answer: {answer.correct_answer}")
        lines.append(f"   Type: {answer.type}")
    lines.extend(
        [
            "",
            "Please provide:",
            "1. A brief explanation for each incorrect answer",
            "2. Any patterns in the mistakes",
            "3. Key concepts the user should review",
            "4. A positive encouragement for improvement",
            "",
            "Format the response in clear paragraphs with line breaks between sections.",
        ]
    )
    return "\n".join(lines)


class ClaudeStudyTools:
    """Generate learning material about an article or excerpt with Claude.

    Args:
        model: Anthropic model ID to use.
        api_key: API key (defaults to CLAUDE_API_KEY env var).
    """

    def __init__(
        self,
        *,
        model: str = DEFAULT_MODEL,
        api_key: str | None = None,
    ) -> None:
        self._model = model
        self._client = create_client(api_key)

    async def explain(self, text: str) -> tuple[str, Usage]:
        """Explain a passage in plain language."""
        _require_text(text)
        reply, usage = await self._complete(
            [{"role": "user", "content": f"Explain the following text: {text}"}],
        )
        return (reply.strip(), usage)

    async def generate_quiz(self, text: str) -> tuple[Quiz, Usage]:
        """Create a five-question quiz about the text."""
        _require_text(text)
        reply, usage = await self._complete(
            [{"role": "user", "content": f"Text: {text}"}],
            system=QUIZ_PROMPT,
            max_tokens=2048,
        )
        quiz = validate_quiz(parse_json_object(reply))
        logger.info("Generated quiz on %r with %d questions", quiz.main_topic, len(quiz.questions))
        return (quiz, usage)

    async def explain_quiz_results(
        self, main_topic: str, answers: list[AnsweredQuestion]
    ) -> tuple[str, Usage]:
        """Explain what the reader got wrong and what to review."""
        if not answers:
            raise EmptyInputError("No answers to explain")
        reply, usage = await self._complete(
            [{"role": "user", "content": _format_answers(main_topic, answers)}],
        )
        return (reply.strip(), usage)

    async def generate_flashcards(self, text: str) -> tuple[list[Flashcard], Usage]:
        """Create flashcards grounded only in the text."""
        _require_text(text)
        reply, usage = await self._complete(
            [{"role": "user", "content": text}],
            system=FLASHCARD_PROMPT,
            max_tokens=2000,
            temperature=0.5,
        )
        return (validate_flashcards(parse_json_object(reply)), usage)

    async def identify_concepts(self, text: str) -> tuple[list[Concept], Usage]:
        """Find explainable concepts and where they occur in the text."""
        _require_text(text)
        reply, usage = await self._complete(
            [{"role": "user", "content": text}],
            system=CONCEPT_PROMPT,
            max_tokens=2048,
            temperature=0.3,
        )
        return (locate_concepts(text, parse_json_object(reply)), usage)

    async def _complete(
        self,
        messages: list[dict[str, Any]],
        *,
        system: str | None = None,
        max_tokens: int = 1024,
        temperature: float = 0.7,
    ) -> tuple[str, Usage]:
        kwargs: dict[str, Any] = {
            "model": self._model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": messages,
        }
        if system:
            kwargs["system"] = system
        try:
            response = await self._client.messages.create(**kwargs)
        except anthropic.APIError as e:
            raise ProviderError(f"Claude API error: {e}") from e
        return (response_text(response), usage_from_response(self._model, response))


def _require_text(text: str) -> None:
    if not text or not text.strip():
        raise EmptyInputError("Text is required")
