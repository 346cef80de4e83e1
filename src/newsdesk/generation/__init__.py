"""Text generation for spoken discussions."""

from newsdesk.generation.base import DiscussionGenerator
from newsdesk.generation.claude import (
    EVALUATION_SYSTEM_PROMPT,
    OPENING_SYSTEM_PROMPT,
    ClaudeDiscussionGenerator,
)
from newsdesk.generation.claude_output import DEFAULT_MODEL, parse_json_object, prepare_text

__all__ = [
    "DEFAULT_MODEL",
    "EVALUATION_SYSTEM_PROMPT",
    "OPENING_SYSTEM_PROMPT",
    "ClaudeDiscussionGenerator",
    "DiscussionGenerator",
    "parse_json_object",
    "prepare_text",
]
