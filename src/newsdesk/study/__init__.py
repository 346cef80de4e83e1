"""Study tools generated from article text."""

from newsdesk.study.claude import ClaudeStudyTools
from newsdesk.study.concepts import find_all_occurrences, locate_concepts
from newsdesk.study.flashcards import validate_flashcards
from newsdesk.study.quiz import validate_quiz

__all__ = [
    "ClaudeStudyTools",
    "find_all_occurrences",
    "locate_concepts",
    "validate_flashcards",
    "validate_quiz",
]
