"""Storage collaborator exceptions."""

from .base import VocabDrillException


class PersistenceError(VocabDrillException):
    """Raised when saving or loading drill data fails."""

    pass
