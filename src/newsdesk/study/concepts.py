"""Locate LLM-identified concepts inside the text they came from."""

from typing import Any

from newsdesk.data import Concept, ConceptType


def find_all_occurrences(text: str, phrase: str) -> list[tuple[int, int]]:
    """Return (start, end) offsets of every whole-word occurrence of ``phrase``.

    A match counts only if it is bounded by whitespace or the ends of the text.
    """
    if not phrase:
        return []
    spans: list[tuple[int, int]] = []
    pos = 0
    while True:
        index = text.find(phrase, pos)
        if index == -1:
            break
        end = index + len(phrase)
        before = index == 0 or text[index - 1].isspace()
        after = end == len(text) or text[end].isspace()
        if before and after:
            spans.append((index, end))
        pos = index + 1
    return spans


def locate_concepts(text: str, payload: dict[str, Any]) -> list[Concept]:
    """Expand each reported concept into its occurrences, longest phrases first."""
    concepts: list[Concept] = []
    for raw in payload.get("concepts") or []:
        if not isinstance(raw, dict) or not raw.get("text"):
            continue
        phrase = str(raw["text"])
        try:
            concept_type = ConceptType(str(raw.get("type", "")).upper())
        except ValueError:
            concept_type = ConceptType.CONCEPT
        for start, end in find_all_occurrences(text, phrase):
            concepts.append(
                Concept(text=phrase, type=concept_type, start_index=start, end_index=end)
            )

    concepts.sort(key=lambda c: len(c.text), reverse=True)
    return concepts
