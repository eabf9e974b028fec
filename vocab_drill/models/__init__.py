"""Data models for Vocab Drill."""

from .group import Group
from .progress import GroupStats, LearnerProgress, OverallStats
from .session import (
    AnswerOutcome,
    AnswerRecord,
    CompletionResult,
    LevelChange,
    QueueEntry,
    Session,
    SessionState,
    TransitionResult,
)
from .vocabulary import LEARNED_LEVEL, ItemStatus, VocabularyItem, derive_status

__all__ = [
    "VocabularyItem",
    "ItemStatus",
    "LEARNED_LEVEL",
    "derive_status",
    "Group",
    "LearnerProgress",
    "GroupStats",
    "OverallStats",
    "QueueEntry",
    "AnswerRecord",
    "Session",
    "SessionState",
    "TransitionResult",
    "AnswerOutcome",
    "LevelChange",
    "CompletionResult",
]
