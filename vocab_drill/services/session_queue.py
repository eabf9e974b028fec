"""In-session drill queue.

Items are drilled from the head of the queue. After each answer the
head is reinserted further back the longer its correct streak is
(expanding-interval rehearsal), or close to the front after a miss.
Four correct answers in a row master the item for the session and
remove it from the queue.
"""

import logging
import random
from collections import deque
from collections.abc import Sequence

from vocab_drill.exceptions import PreconditionViolation
from vocab_drill.interfaces import RandomSource
from vocab_drill.models import QueueEntry, TransitionResult, VocabularyItem

logger = logging.getLogger(__name__)

MASTERY_STREAK = 4
MAX_CONSECUTIVE_NEW = 5

# Reinsertion offsets (inclusive ranges) keyed by the streak after a correct answer
CORRECT_OFFSETS: dict[int, tuple[int, int]] = {
    1: (5, 6),
    2: (10, 12),
    3: (20, 20),
}
WRONG_OFFSET: tuple[int, int] = (2, 3)


class SessionQueueEngine:
    """Build and advance the ordered queue for one active session.

    The engine itself is stateless apart from its random source; every
    method takes a queue and returns a new list, leaving the input
    untouched.
    """

    def __init__(self, rng: RandomSource | None = None):
        """Initialize the queue engine.

        Args:
            rng: Source for reinsertion jitter. Defaults to an unseeded
                ``random.Random``; pass a seeded one for reproducible order.
        """
        self._rng = rng if rng is not None else random.Random()

    def build_initial_queue(
        self,
        candidates: Sequence[VocabularyItem],
        session_goal: int,
    ) -> list[QueueEntry]:
        """Build the opening queue with a throttle on new items.

        Candidates are capped to ``session_goal`` and split into new
        (never attempted) and review items. The two partitions are
        merged in candidate order, except that after five new entries
        in a row a review entry is forced while any remain.

        Args:
            candidates: Items in priority order (weakest first)
            session_goal: Maximum number of entries

        Returns:
            List of QueueEntry with zero streaks
        """
        limited = list(candidates)[: max(session_goal, 0)]
        new_items = deque((i, item) for i, item in enumerate(limited) if item.is_new)
        review_items = deque((i, item) for i, item in enumerate(limited) if not item.is_new)

        queue: list[QueueEntry] = []
        consecutive_new = 0

        while new_items or review_items:
            if consecutive_new >= MAX_CONSECUTIVE_NEW and review_items:
                take_new = False
            elif new_items and review_items:
                take_new = new_items[0][0] < review_items[0][0]
            else:
                take_new = bool(new_items)

            if take_new:
                _, item = new_items.popleft()
                consecutive_new += 1
            else:
                _, item = review_items.popleft()
                consecutive_new = 0
            queue.append(QueueEntry(item_id=item.id))

        logger.debug(f"Built queue of {len(queue)} entries from {len(limited)} candidates")
        return queue

    def transition(self, queue: Sequence[QueueEntry], was_correct: bool) -> TransitionResult:
        """Pop the head entry and place it according to the answer.

        Args:
            queue: Current queue (not modified)
            was_correct: Whether the head item was answered correctly

        Returns:
            TransitionResult with the new queue, the updated entry and
            whether the entry was mastered and removed

        Raises:
            PreconditionViolation: If the queue is empty
        """
        if not queue:
            raise PreconditionViolation("Cannot transition an empty queue")

        head, rest = queue[0], list(queue[1:])

        if was_correct:
            streak = head.session_streak + 1
            entry = QueueEntry(item_id=head.item_id, session_streak=streak)
            if streak >= MASTERY_STREAK:
                return TransitionResult(queue=rest, entry=entry, mastered=True)
            position = self.reinsert_position(streak, len(rest))
        else:
            entry = QueueEntry(item_id=head.item_id, session_streak=0)
            position = self.reinsert_position(0, len(rest))

        rest.insert(position, entry)
        return TransitionResult(queue=rest, entry=entry, position=position)

    def reinsert_position(self, streak: int, remaining: int) -> int:
        """Draw the reinsertion index for an entry.

        Args:
            streak: Streak after the answer (0 for a wrong answer)
            remaining: Length of the queue without the entry

        Returns:
            Index to insert at, clamped to ``remaining``
        """
        low, high = CORRECT_OFFSETS[streak] if streak > 0 else WRONG_OFFSET
        offset = low if low == high else self._rng.randint(low, high)
        return min(offset, remaining)

    @staticmethod
    def remove_item(queue: Sequence[QueueEntry], item_id: str) -> list[QueueEntry]:
        """Return the queue without any entry for ``item_id``."""
        return [entry for entry in queue if entry.item_id != item_id]

    @staticmethod
    def peek_head(queue: Sequence[QueueEntry]) -> QueueEntry | None:
        """Return the entry being drilled, or None when the queue is drained."""
        return queue[0] if queue else None
