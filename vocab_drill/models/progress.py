"""Data models for learner progress and statistics."""

from dataclasses import dataclass, field
from datetime import date


@dataclass
class LearnerProgress:
    """Learner-wide bookkeeping updated at session completion."""

    daily_streak: int = 0
    last_session_date: date | None = None
    session_goal: int = 50
    total_items_learned: int = 0
    overall_accuracy: int = 0


@dataclass
class GroupStats:
    """Summary of a single group."""

    group_id: str = ""
    name: str = ""
    total_items: int = 0
    due_items: int = 0
    accuracy: int = 0
    unlocked: bool = False
    completed_sessions: int = 0


@dataclass
class OverallStats:
    """Summary across all items."""

    total_items: int = 0
    new_items: int = 0
    learning_items: int = 0
    learned_items: int = 0
    muted_items: int = 0
    total_attempts: int = 0
    total_correct: int = 0
    overall_accuracy: int = 0
    level_histogram: dict[int, int] = field(default_factory=dict)

    @property
    def learned_ratio(self) -> float:
        """Fraction of items that are learned."""
        if self.total_items == 0:
            return 0.0
        return self.learned_items / self.total_items
