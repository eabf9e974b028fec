"""Protocol for the downstream persistence collaborator."""

from typing import Protocol

from vocab_drill.models import Group, LearnerProgress, Session, VocabularyItem


class PersistenceSink(Protocol):
    """Receives committed engine state for durable storage.

    The engine calls these only after an in-memory transition has
    committed. Failures are reported to the caller and never roll
    back engine state.
    """

    def save_items(self, items: list[VocabularyItem]) -> None:
        """Upsert items by id."""
        ...

    def save_groups(self, groups: list[Group]) -> None:
        """Upsert groups by id, preserving their order."""
        ...

    def save_session(self, session: Session) -> None:
        """Store a completed session and its answer log."""
        ...

    def save_progress(self, progress: LearnerProgress) -> None:
        """Store learner-wide progress."""
        ...
