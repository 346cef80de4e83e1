"""Tests for ClaudeDiscussionGenerator and the shared Claude reply helpers."""

import json
from unittest.mock import AsyncMock, MagicMock

import anthropic
import httpx
import pytest
from anthropic.types import TextBlock

from newsdesk.data import DiscussionOpening, Evaluation, Usage
from newsdesk.errors import (
    ConfigurationError,
    EmptyInputError,
    MalformedResponseError,
    ProviderError,
)
from newsdesk.generation import (
    EVALUATION_SYSTEM_PROMPT,
    OPENING_SYSTEM_PROMPT,
    ClaudeDiscussionGenerator,
    parse_json_object,
    prepare_text,
)


def _make_mock_usage(input_tokens: int = 100, output_tokens: int = 50) -> MagicMock:
    """Create a mock usage object."""
    usage = MagicMock()
    usage.input_tokens = input_tokens
    usage.output_tokens = output_tokens
    usage.cache_creation_input_tokens = 0
    usage.cache_read_input_tokens = 0
    return usage


def _make_response(text: str) -> MagicMock:
    """Create a mock API response with a real TextBlock."""
    response = MagicMock()
    response.content = [TextBlock(type="text", text=text)]
    response.usage = _make_mock_usage()
    return response


def _generator(reply: str) -> ClaudeDiscussionGenerator:
    gen = ClaudeDiscussionGenerator(api_key="test-key")
    object.__setattr__(
        gen._client.messages, "create", AsyncMock(return_value=_make_response(reply))
    )
    return gen


OPENING = json.dumps(
    {
        "discussion": "The article covers a new climate deal.",
        "question": "How might the deal change energy prices?",
    }
)
EVALUATION = json.dumps(
    {
        "acknowledgment": "You make a good point about subsidies.",
        "followUpQuestion": "Who should pay for the transition?",
    }
)


def test_init_requires_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CLAUDE_API_KEY", raising=False)
    with pytest.raises(ConfigurationError, match="API key required"):
        ClaudeDiscussionGenerator()


def test_init_uses_env_var(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CLAUDE_API_KEY", "env-key")
    gen = ClaudeDiscussionGenerator()
    assert gen._client.api_key == "env-key"


# -- open_discussion --


async def test_open_discussion_returns_opening() -> None:
    gen = _generator(OPENING)
    opening, usage = await gen.open_discussion("A climate deal was signed today.")

    assert isinstance(opening, DiscussionOpening)
    assert opening.discussion == "The article covers a new climate deal."
    assert opening.question == "How might the deal change energy prices?"
    assert isinstance(usage, Usage)
    assert usage.input_tokens == 100
    assert usage.api_calls[0].model == "claude-haiku-4-5-20251001"


async def test_open_discussion_calls_api_with_correct_params() -> None:
    gen = _generator(OPENING)
    await gen.open_discussion("  A climate   deal\nwas signed. ")

    mock_create: AsyncMock = gen._client.messages.create  # type: ignore[assignment]
    call_kwargs = dict(mock_create.call_args.kwargs)
    assert call_kwargs["system"] == OPENING_SYSTEM_PROMPT
    assert call_kwargs["temperature"] == 0.7
    assert call_kwargs["messages"] == [
        {"role": "user", "content": "A climate deal was signed."}
    ]


async def test_open_discussion_rejects_empty_text() -> None:
    gen = _generator(OPENING)
    with pytest.raises(EmptyInputError):
        await gen.open_discussion("   ")
    gen._client.messages.create.assert_not_called()  # type: ignore[attr-defined]


async def test_open_discussion_handles_code_fences() -> None:
    gen = _generator(f"```json\n{OPENING}\n```")
    opening, _ = await gen.open_discussion("text")
    assert opening.question == "How might the deal change energy prices?"


async def test_open_discussion_missing_field_is_malformed() -> None:
    gen = _generator(json.dumps({"discussion": "Only a summary"}))
    with pytest.raises(MalformedResponseError):
        await gen.open_discussion("text")


async def test_open_discussion_invalid_json_is_malformed() -> None:
    gen = _generator("Sure! Here is your discussion.")
    with pytest.raises(MalformedResponseError):
        await gen.open_discussion("text")


async def test_api_error_becomes_provider_error() -> None:
    gen = ClaudeDiscussionGenerator(api_key="test-key")
    request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
    object.__setattr__(
        gen._client.messages,
        "create",
        AsyncMock(side_effect=anthropic.APIConnectionError(request=request)),
    )
    with pytest.raises(ProviderError, match="Claude API error"):
        await gen.open_discussion("text")


# -- evaluate_response --


async def test_evaluate_response_returns_evaluation() -> None:
    gen = _generator(EVALUATION)
    evaluation, _ = await gen.evaluate_response(
        question="How might the deal change energy prices?",
        response="Subsidies will shift.",
        context="A climate deal was signed today.",
    )

    assert isinstance(evaluation, Evaluation)
    assert evaluation.acknowledgment == "You make a good point about subsidies."
    assert evaluation.follow_up_question == "Who should pay for the transition?"

    mock_create: AsyncMock = gen._client.messages.create  # type: ignore[assignment]
    call_kwargs = dict(mock_create.call_args.kwargs)
    assert call_kwargs["system"] == EVALUATION_SYSTEM_PROMPT
    user_content = call_kwargs["messages"][0]["content"]
    assert user_content == (
        "Context: A climate deal was signed today.\n\n"
        "Previous Question: How might the deal change energy prices?\n\n"
        "User's Response: Subsidies will shift."
    )


@pytest.mark.parametrize(
    ("question", "response", "context"),
    [("", "r", "c"), ("q", "", "c"), ("q", "r", "")],
)
async def test_evaluate_response_requires_all_inputs(
    question: str, response: str, context: str
) -> None:
    gen = _generator(EVALUATION)
    with pytest.raises(EmptyInputError):
        await gen.evaluate_response(question, response, context)


# -- helpers --


def test_prepare_text_truncates() -> None:
    assert prepare_text("word " * 2000, max_chars=10) == "word word "


def test_parse_json_object_rejects_arrays() -> None:
    with pytest.raises(MalformedResponseError):
        parse_json_object("[1, 2]")
