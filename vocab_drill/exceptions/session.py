"""Session and answer-processing exceptions.

None of these are raised after a mutation has started: every check
runs before counters, the answer log or the queue are touched.
"""

from .base import VocabDrillException


class PreconditionViolation(VocabDrillException):
    """Raised when an operation is requested in a state that forbids it.

    Examples: transitioning an empty queue, answering on a completed
    session, or answering for an item that is not at the queue head.
    """

    pass


class InvalidInputError(VocabDrillException):
    """Raised when user-supplied input is unusable (e.g. a blank answer)."""

    pass


class NotFoundError(VocabDrillException):
    """Raised when an item or group id is not known to the session/context."""

    pass
