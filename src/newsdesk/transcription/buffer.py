"""TranscriptBuffer implementation."""

import re

_WHITESPACE = re.compile(r"\s+")
_SPACE_BEFORE_PUNCTUATION = re.compile(r"\s+([.,?!])")


def clean_transcript(text: str) -> str:
    """Collapse whitespace and drop spaces before ``. , ? !``."""
    collapsed = _WHITESPACE.sub(" ", text).strip()
    return _SPACE_BEFORE_PUNCTUATION.sub(r"\1", collapsed)


class TranscriptBuffer:
    """Ordered finalized transcript fragments of one recording."""

    def __init__(self) -> None:
        self._fragments: list[str] = []
        self._current = ""

    def append(self, fragment: str) -> None:
        """Add a fragment. Empty or whitespace-only fragments are ignored."""
        if not fragment or not fragment.strip():
            return
        self._fragments.append(fragment)
        self._current = clean_transcript(" ".join(self._fragments))

    def current(self) -> str:
        """Cleaned transcript accumulated so far."""
        return self._current

    @property
    def fragments(self) -> list[str]:
        return self._fragments.copy()

    def reset(self) -> None:
        """Clear the buffer."""
        self._fragments.clear()
        self._current = ""

    def __bool__(self) -> bool:
        return bool(self._current)
