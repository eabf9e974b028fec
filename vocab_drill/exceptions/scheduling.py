"""Level scheduling exceptions."""

from .base import VocabDrillException


class InvalidLevelError(VocabDrillException, ValueError):
    """Raised when a mastery level falls outside 0-8."""

    pass
