"""Presenter protocol for output abstraction."""

from typing import Protocol

from vocab_drill.models import (
    AnswerOutcome,
    CompletionResult,
    GroupStats,
    OverallStats,
    VocabularyItem,
)


class PresenterProtocol(Protocol):
    """Interface for presenting output to the learner (CLI, tests, etc).

    The drill commands talk only to this protocol, so the same
    session flow can be driven by different front ends.
    """

    def show_info(self, message: str) -> None:
        """Display an informational message."""
        ...

    def show_success(self, message: str) -> None:
        """Display a success message."""
        ...

    def show_warning(self, message: str) -> None:
        """Display a warning message."""
        ...

    def show_error(self, message: str) -> None:
        """Display an error message."""
        ...

    def show_prompt(self, item: VocabularyItem, remaining: int) -> None:
        """Display the item currently being drilled.

        Args:
            item: Item at the head of the queue
            remaining: Queue length including this item
        """
        ...

    def show_answer_feedback(self, outcome: AnswerOutcome) -> None:
        """Display the judgement for a submitted answer."""
        ...

    def show_completion(self, result: CompletionResult) -> None:
        """Display the summary of a completed session."""
        ...

    def show_stats(self, overall: OverallStats, groups: list[GroupStats]) -> None:
        """Display overall and per-group statistics."""
        ...
