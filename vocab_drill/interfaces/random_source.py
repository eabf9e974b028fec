"""Protocol for the random source used by queue reinsertion."""

from typing import Protocol


class RandomSource(Protocol):
    """Anything that can draw an integer from an inclusive range.

    ``random.Random`` satisfies this protocol; tests pass a seeded
    instance or a stub returning fixed values.
    """

    def randint(self, a: int, b: int) -> int:
        """Return an integer N such that a <= N <= b."""
        ...
