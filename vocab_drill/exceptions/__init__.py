"""Custom exceptions for Vocab Drill."""

from .base import VocabDrillException
from .scheduling import InvalidLevelError
from .session import InvalidInputError, NotFoundError, PreconditionViolation
from .storage import PersistenceError
from .validation import SetupError

__all__ = [
    "VocabDrillException",
    "PreconditionViolation",
    "InvalidInputError",
    "NotFoundError",
    "InvalidLevelError",
    "PersistenceError",
    "SetupError",
]
