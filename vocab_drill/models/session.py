"""Data models for drill sessions, queue entries and answers."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import uuid4

from vocab_drill.utils.text_utils import calculate_accuracy


class SessionState(Enum):
    """Lifecycle state of a session."""

    ACTIVE = "active"
    COMPLETED = "completed"


@dataclass(frozen=True)
class QueueEntry:
    """A single position in the in-session drill queue."""

    item_id: str
    session_streak: int = 0  # Consecutive correct answers this session (0-4)


@dataclass(frozen=True)
class AnswerRecord:
    """Immutable log line for one submitted answer."""

    item_id: str
    raw_answer: str
    expected: str
    correct: bool
    near_match: bool
    timestamp: datetime


@dataclass
class Session:
    """One sitting of drilling.

    The answer log is append-only. Once ``state`` is COMPLETED the
    session is read-only: every engine operation rejects it.
    """

    started_at: datetime
    id: str = field(default_factory=lambda: str(uuid4()))
    group_id: str | None = None
    candidate_ids: list[str] = field(default_factory=list)
    queue: list[QueueEntry] = field(default_factory=list)
    answers: list[AnswerRecord] = field(default_factory=list)
    mastered_ids: list[str] = field(default_factory=list)
    state: SessionState = SessionState.ACTIVE
    completed_at: datetime | None = None

    @property
    def is_active(self) -> bool:
        return self.state == SessionState.ACTIVE

    @property
    def correct_count(self) -> int:
        return sum(1 for record in self.answers if record.correct)

    @property
    def accuracy(self) -> int:
        """Percentage of correct answers, 0 when nothing was answered."""
        return calculate_accuracy(self.correct_count, len(self.answers))

    @property
    def touched_ids(self) -> list[str]:
        """Item ids answered at least once, in first-answer order."""
        seen: dict[str, None] = {}
        for record in self.answers:
            seen.setdefault(record.item_id, None)
        return list(seen)

    @property
    def remaining(self) -> int:
        return len(self.queue)


@dataclass
class TransitionResult:
    """Outcome of popping and reinserting the queue head."""

    queue: list[QueueEntry]
    entry: QueueEntry  # The head entry after its streak update
    mastered: bool = False
    position: int | None = None  # Reinsert index, None when mastered


@dataclass
class AnswerOutcome:
    """What the caller learns from one submitted answer."""

    correct: bool
    near_match: bool
    mastered_this_answer: bool
    expected: str = ""
    accent_hint: str = ""  # Expected character the learner got wrong, if any
    session_streak: int = 0


@dataclass(frozen=True)
class LevelChange:
    """Level movement for one item at session completion."""

    old_level: int
    new_level: int
    next_review_date: datetime

    @property
    def delta(self) -> int:
        return self.new_level - self.old_level


@dataclass
class CompletionResult:
    """Summary returned when a session is completed."""

    accuracy: int
    level_changes_by_item: dict[str, LevelChange] = field(default_factory=dict)
    unlocked_group_id: str | None = None
    daily_streak: int = 0
    mastered_count: int = 0
    total_answers: int = 0

    @property
    def advanced(self) -> list[str]:
        return [i for i, c in self.level_changes_by_item.items() if c.delta > 0]

    @property
    def dropped(self) -> list[str]:
        return [i for i, c in self.level_changes_by_item.items() if c.delta < 0]
