"""Data models for vocabulary items."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import uuid4

LEARNED_LEVEL = 6  # Items at or above this level count as learned


class ItemStatus(Enum):
    """Derived learning status of a vocabulary item."""

    NEW = "new"
    LEARNING = "learning"
    LEARNED = "learned"


def derive_status(level: int, total_attempts: int) -> ItemStatus:
    """Derive an item's status from its level and attempt count.

    This is the only place status is computed; everything else reads
    ``VocabularyItem.status``.

    Args:
        level: Mastery level (0-8)
        total_attempts: Lifetime number of answers for the item

    Returns:
        LEARNED when level >= 6, NEW when never attempted, else LEARNING
    """
    if level >= LEARNED_LEVEL:
        return ItemStatus.LEARNED
    if total_attempts == 0:
        return ItemStatus.NEW
    return ItemStatus.LEARNING


@dataclass
class VocabularyItem:
    """A vocabulary pair with its long-term scheduling state."""

    term: str  # Word the learner must produce (e.g. Portuguese)
    translation: str  # Prompt shown to the learner (e.g. English)
    id: str = field(default_factory=lambda: str(uuid4()))
    group_id: str | None = None
    example_sentences: list[str] = field(default_factory=list)
    level: int = 0
    created_at: datetime = field(default_factory=datetime.now)
    last_review_date: datetime | None = None
    next_review_date: datetime | None = None  # None = due since creation
    total_attempts: int = 0
    total_correct: int = 0
    total_wrong: int = 0
    muted: bool = False

    def __post_init__(self):
        if self.next_review_date is None:
            self.next_review_date = self.created_at

    @property
    def status(self) -> ItemStatus:
        """Current learning status (see derive_status)."""
        return derive_status(self.level, self.total_attempts)

    @property
    def is_new(self) -> bool:
        """Check if the item has never been answered."""
        return self.total_attempts == 0

    def record_attempt(self, correct: bool) -> None:
        """Update lifetime counters for one answer."""
        self.total_attempts += 1
        if correct:
            self.total_correct += 1
        else:
            self.total_wrong += 1

    def __str__(self) -> str:
        return f"{self.term} ({self.translation})"
