"""Shared helpers for calling Claude and reading structured JSON replies."""

import json
import os
import re
from typing import Any

import anthropic

from newsdesk.data import APICallUsage, Usage
from newsdesk.errors import ConfigurationError, MalformedResponseError

DEFAULT_MODEL = "claude-haiku-4-5-20251001"
MAX_PROMPT_CHARS = 4000


def create_client(api_key: str | None) -> anthropic.AsyncAnthropic:
    """Build an async Anthropic client, requiring a key up front."""
    resolved_key = api_key or os.environ.get("CLAUDE_API_KEY")
    if not resolved_key:
        raise ConfigurationError(
            "Claude API key required. Pass api_key or set CLAUDE_API_KEY env var."
        )
    return anthropic.AsyncAnthropic(api_key=resolved_key)


def prepare_text(text: str, max_chars: int = MAX_PROMPT_CHARS) -> str:
    """Collapse whitespace and truncate to leave room for the system prompt."""
    return re.sub(r"\s+", " ", text).strip()[:max_chars]


def usage_from_response(model: str, response: Any) -> Usage:
    return Usage(
        api_calls=[
            APICallUsage(
                model=model,
                input_tokens=response.usage.input_tokens,
                output_tokens=response.usage.output_tokens,
                cache_creation_input_tokens=getattr(
                    response.usage, "cache_creation_input_tokens", 0
                )
                or 0,
                cache_read_input_tokens=getattr(response.usage, "cache_read_input_tokens", 0)
                or 0,
            ),
        ],
    )


def response_text(response: Any) -> str:
    """Concatenate the text blocks of a Messages API response."""
    text = ""
    for block in response.content:
        if hasattr(block, "text"):
            text += block.text
    if not text.strip():
        raise MalformedResponseError("Empty response from Claude")
    return text


def parse_json_object(text: str) -> dict[str, Any]:
    """Parse a JSON object reply, tolerating markdown code fences."""
    cleaned = text.strip()
    if cleaned.startswith("```"):
        lines = [line for line in cleaned.split("\n") if not line.strip().startswith("```")]
        cleaned = "\n".join(lines)

    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise MalformedResponseError(f"Invalid JSON response from Claude: {e}") from e

    if not isinstance(parsed, dict):
        raise MalformedResponseError("Expected a JSON object from Claude")
    return parsed
