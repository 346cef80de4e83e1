"""Claude-backed discussion leader."""

import logging

import anthropic
from pydantic import BaseModel, Field, ValidationError

from newsdesk.data import DiscussionOpening, Evaluation, Usage
from newsdesk.errors import EmptyInputError, MalformedResponseError, ProviderError
from newsdesk.generation.claude_output import (
    DEFAULT_MODEL,
    create_client,
    parse_json_object,
    prepare_text,
    response_text,
    usage_from_response,
)

logger = logging.getLogger(__name__)

OPENING_SYSTEM_PROMPT = """\
You are an engaging discussion leader who creates interactive learning \
experiences. Analyze the provided text and create:
1. A brief discussion of the main points (2-3 sentences)
2. A thought-provoking question that tests understanding

Make the discussion conversational and engaging, as it will be read aloud. \
The question should require analytical thinking and cannot be answered with a \
simple yes/no.

Respond ONLY with a JSON object (no markdown fences, no commentary):
{"discussion": "Brief discussion of main points", "question": "Thought-provoking question"}\
"""

EVALUATION_SYSTEM_PROMPT = """\
You are an engaging conversation partner discussing news and current events. \
You will receive the original context (article text), the previous question \
asked, and the user's spoken response.

1. Write an acknowledgment that references specific points the user made, \
shows active listening, validates their perspective and connects it to the \
broader discussion, in natural conversational language.
2. Write a follow-up question that builds on specific points from their \
response and keeps a natural conversational flow. Avoid generic or \
disconnected questions.

Make it feel like a dialogue between interested parties, not an interview or \
a quiz. Respond ONLY with a JSON object (no markdown fences, no commentary):
{"acknowledgment": "...", "followUpQuestion": "..."}\
"""


class _OpeningPayload(BaseModel):
    discussion: str = Field(min_length=1)
    question: str = Field(min_length=1)


class _EvaluationPayload(BaseModel):
    acknowledgment: str = Field(min_length=1)
    followUpQuestion: str = Field(min_length=1)


class ClaudeDiscussionGenerator:
    """Open discussions and react to spoken answers using Claude.

    Args:
        model: Anthropic model ID to use.
        api_key: API key (defaults to CLAUDE_API_KEY env var).
        temperature: Sampling temperature.
        max_tokens: Reply budget per call.
    """

    def __init__(
        self,
        *,
        model: str = DEFAULT_MODEL,
        api_key: str | None = None,
        temperature: float = 0.7,
        max_tokens: int = 1024,
    ) -> None:
        self._model = model
        self._client = create_client(api_key)
        self._temperature = temperature
        self._max_tokens = max_tokens

    async def open_discussion(self, text: str) -> tuple[DiscussionOpening, Usage]:
        prepared = prepare_text(text or "")
        if not prepared:
            raise EmptyInputError("No text provided for discussion")

        data, usage = await self._complete(OPENING_SYSTEM_PROMPT, prepared)
        try:
            payload = _OpeningPayload.model_validate(data)
        except ValidationError as e:
            raise MalformedResponseError(f"Invalid discussion format from Claude: {e}") from e

        logger.info("Generated discussion opening: %s", payload.question[:100])
        return (DiscussionOpening(discussion=payload.discussion, question=payload.question), usage)

    async def evaluate_response(
        self,
        question: str,
        response: str,
        context: str,
    ) -> tuple[Evaluation, Usage]:
        if not (question and response and context):
            raise EmptyInputError("Question, response, and context are required")

        user_content = (
            f"Context: {prepare_text(context)}\n\n"
            f"Previous Question: {question}\n\n"
            f"User's Response: {response}"
        )
        data, usage = await self._complete(EVALUATION_SYSTEM_PROMPT, user_content)
        try:
            payload = _EvaluationPayload.model_validate(data)
        except ValidationError as e:
            raise MalformedResponseError(f"Invalid evaluation format from Claude: {e}") from e

        return (
            Evaluation(
                acknowledgment=payload.acknowledgment,
                follow_up_question=payload.followUpQuestion,
            ),
            usage,
        )

    async def _complete(self, system: str, user_content: str) -> tuple[dict, Usage]:
        try:
            response = await self._client.messages.create(
                model=self._model,
                max_tokens=self._max_tokens,
                temperature=self._temperature,
                system=system,
                messages=[{"role": "user", "content": user_content}],
            )
        except anthropic.APIError as e:
            raise ProviderError(f"Claude API error: {e}") from e

        usage = usage_from_response(self._model, response)
        return (parse_json_object(response_text(response)), usage)
