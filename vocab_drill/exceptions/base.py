"""Base exception classes for Vocab Drill."""


class VocabDrillException(Exception):
    """Base exception for all Vocab Drill errors.

    All custom exceptions in the vocab_drill package should inherit
    from this base class for consistent error handling.
    """

    pass
