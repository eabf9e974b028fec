"""Null presenter for testing (no output)."""

from vocab_drill.models import (
    AnswerOutcome,
    CompletionResult,
    GroupStats,
    OverallStats,
    VocabularyItem,
)


class NullPresenter:
    """Present output to nowhere (testing implementation)."""

    def show_info(self, message: str) -> None:
        pass

    def show_success(self, message: str) -> None:
        pass

    def show_warning(self, message: str) -> None:
        pass

    def show_error(self, message: str) -> None:
        pass

    def show_prompt(self, item: VocabularyItem, remaining: int) -> None:
        pass

    def show_answer_feedback(self, outcome: AnswerOutcome) -> None:
        pass

    def show_completion(self, result: CompletionResult) -> None:
        pass

    def show_stats(self, overall: OverallStats, groups: list[GroupStats]) -> None:
        pass


class NullProgressCallback:
    """Null implementation of progress callback (testing)."""

    def on_start(self, total: int, description: str) -> None:
        pass

    def on_progress(self, current: int, item_description: str) -> None:
        pass

    def on_complete(self) -> None:
        pass

    def on_error(self, item_description: str, error_message: str) -> None:
        pass
