"""Answer judging and the per-answer session transition."""

import logging
from collections.abc import Mapping
from datetime import datetime

from vocab_drill.exceptions import InvalidInputError, NotFoundError, PreconditionViolation
from vocab_drill.models import AnswerOutcome, AnswerRecord, Session, VocabularyItem
from vocab_drill.services.session_queue import SessionQueueEngine
from vocab_drill.utils.text_utils import accent_difference, fold_answer, normalize_answer

logger = logging.getLogger(__name__)


def judge_answer(raw_answer: str, expected: str) -> tuple[bool, bool]:
    """Judge an answer against the expected text.

    Args:
        raw_answer: What the learner typed
        expected: The item's term

    Returns:
        Tuple of (correct, near_match). ``correct`` requires equality
        after trimming and case-folding; ``near_match`` flags answers
        that only differ in diacritics and never counts as correct.
    """
    exact = fold_answer(raw_answer) == fold_answer(expected)
    tolerant = normalize_answer(raw_answer) == normalize_answer(expected)
    return exact, tolerant and not exact


class AnswerProcessor:
    """Apply one submitted answer to an active session.

    All checks run before anything is mutated, and the queue transition
    is computed before counters change, so an error never leaves the
    item, the log or the queue half-updated.
    """

    def __init__(self, queue_engine: SessionQueueEngine):
        """Initialize the answer processor.

        Args:
            queue_engine: Engine used to move the queue head
        """
        self._queue_engine = queue_engine

    def submit(
        self,
        session: Session,
        items: Mapping[str, VocabularyItem],
        item_id: str,
        raw_answer: str,
        answered_at: datetime,
    ) -> AnswerOutcome:
        """Judge an answer for the head item and advance the session.

        Args:
            session: Active session
            items: Item lookup by id
            item_id: Id of the item being answered
            raw_answer: Learner's answer as typed
            answered_at: Timestamp recorded in the answer log

        Returns:
            AnswerOutcome for the caller's feedback

        Raises:
            PreconditionViolation: Session completed, queue empty, or
                ``item_id`` is not the head entry
            NotFoundError: ``item_id`` is not a candidate of this session
            InvalidInputError: Answer is empty or whitespace only
        """
        if not session.is_active:
            raise PreconditionViolation(f"Session {session.id} is already completed")
        if item_id not in session.candidate_ids or item_id not in items:
            raise NotFoundError(f"Item {item_id} is not part of session {session.id}")

        head = self._queue_engine.peek_head(session.queue)
        if head is None:
            raise PreconditionViolation(f"Session {session.id} has no items left to drill")
        if head.item_id != item_id:
            raise PreconditionViolation(
                f"Item {item_id} is not the current entry (expected {head.item_id})"
            )
        if not raw_answer or not raw_answer.strip():
            raise InvalidInputError("Answer must not be empty")

        item = items[item_id]
        correct, near_match = judge_answer(raw_answer, item.term)
        result = self._queue_engine.transition(session.queue, correct)

        # Commit
        item.record_attempt(correct)
        session.queue = result.queue
        if result.mastered:
            session.mastered_ids.append(item_id)
        session.answers.append(
            AnswerRecord(
                item_id=item_id,
                raw_answer=raw_answer,
                expected=item.term,
                correct=correct,
                near_match=near_match,
                timestamp=answered_at,
            )
        )

        logger.debug(
            f"Answer for {item.term!r}: correct={correct} near={near_match} "
            f"streak={result.entry.session_streak} mastered={result.mastered}"
        )

        return AnswerOutcome(
            correct=correct,
            near_match=near_match,
            mastered_this_answer=result.mastered,
            expected=item.term,
            accent_hint=accent_difference(raw_answer, item.term) if near_match else "",
            session_streak=result.entry.session_streak,
        )
