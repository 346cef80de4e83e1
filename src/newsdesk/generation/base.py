from typing import Protocol

from newsdesk.data import DiscussionOpening, Evaluation, Usage


class DiscussionGenerator(Protocol):
    """Interface for the text model that leads a spoken discussion."""

    async def open_discussion(self, text: str) -> tuple[DiscussionOpening, Usage]:
        """Summarize a text for discussion and ask a first question.

        Args:
            text: Article text or highlighted excerpt.

        Returns:
            Tuple of (discussion summary and question, usage).
        """
        ...

    async def evaluate_response(
        self,
        question: str,
        response: str,
        context: str,
    ) -> tuple[Evaluation, Usage]:
        """Acknowledge a spoken answer and ask a follow-up question.

        Args:
            question: The question the reader answered.
            response: The reader's transcribed answer.
            context: Article text or highlighted excerpt.

        Returns:
            Tuple of (acknowledgment and follow-up question, usage).
        """
        ...
