"""Validation-related exceptions."""

from .base import VocabDrillException


class SetupError(VocabDrillException):
    """Raised when setup checks fail (missing files, bad configuration, etc)."""

    pass
