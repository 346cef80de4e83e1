from typing import Any

from newsdesk.data import Flashcard
from newsdesk.errors import MalformedResponseError


def validate_flashcards(payload: dict[str, Any]) -> list[Flashcard]:
    """Build flashcards from the parsed JSON reply, filling in missing fields."""
    cards = payload.get("flashcards")
    if not isinstance(cards, list):
        raise MalformedResponseError("Invalid response format: missing flashcards array")

    flashcards: list[Flashcard] = []
    for index, card in enumerate(cards):
        if not isinstance(card, dict):
            card = {}
        flashcards.append(
            Flashcard(
                id=str(card.get("id") or index + 1),
                front=str(card.get("front") or "Question not generated"),
                back=str(card.get("back") or "Answer not generated"),
                category=str(card.get("category") or "main-idea"),
            )
        )
    return flashcards
