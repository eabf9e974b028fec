"""Progress reporting for sentence-generation batches."""

from typing import Protocol


class ProgressCallback(Protocol):
    """Receives per-pair updates while an import fetches example sentences."""

    def on_start(self, total: int, description: str) -> None:
        """A batch of ``total`` word pairs is about to be processed."""
        ...

    def on_progress(self, current: int, item_description: str) -> None:
        """Pair number ``current`` (1-based) has its sentences.

        Args:
            current: Position of the pair in the batch
            item_description: The pair's term
        """
        ...

    def on_complete(self) -> None: ...

    def on_error(self, item_description: str, error_message: str) -> None:
        """The sentence API could not serve a pair.

        The pair still gets template sentences; this only reports that
        the API result was missing.

        Args:
            item_description: The pair's term
            error_message: What was used instead
        """
        ...
