"""Session start and completion."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import date, datetime

from vocab_drill.config import VocabDrillConfig
from vocab_drill.exceptions import NotFoundError, PreconditionViolation
from vocab_drill.models import (
    CompletionResult,
    Group,
    ItemStatus,
    LearnerProgress,
    LevelChange,
    Session,
    SessionState,
    VocabularyItem,
    derive_status,
)
from vocab_drill.services import level_scheduler
from vocab_drill.services.session_queue import SessionQueueEngine
from vocab_drill.utils.date_utils import calendar_date, days_between
from vocab_drill.utils.text_utils import calculate_accuracy

logger = logging.getLogger(__name__)


@dataclass
class _GroupUpdate:
    group: Group
    completed_sessions: int
    accuracy: int
    unlock: Group | None


def next_daily_streak(previous_streak: int, last_session_date: date | None, today: date) -> int:
    """Compute the practice-day streak after a session on ``today``.

    Args:
        previous_streak: Streak before this session
        last_session_date: Day of the previous completed session, if any
        today: Day of this session

    Returns:
        1 for a first session or after a gap, unchanged for a second
        session on the same day, +1 when the last session was yesterday
    """
    if last_session_date is None:
        return 1
    gap = days_between(last_session_date, today)
    if gap == 0:
        return previous_streak
    if gap == 1:
        return previous_streak + 1
    return 1


class SessionLifecycle:
    """Own the Active -> Completed lifecycle of drill sessions."""

    def __init__(self, config: VocabDrillConfig, queue_engine: SessionQueueEngine):
        """Initialize the lifecycle.

        Args:
            config: Session and unlock policy
            queue_engine: Engine that builds the opening queue
        """
        self.config = config
        self._queue_engine = queue_engine

    def start(
        self,
        candidates: Sequence[VocabularyItem],
        session_goal: int,
        as_of: datetime,
        group_id: str | None = None,
    ) -> Session:
        """Start a new session over ``candidates``.

        Due items are drilled weakest first. When nothing is due, all
        non-muted candidates are used instead so the learner can
        practice ahead of schedule.

        Args:
            candidates: Items the session may draw from
            session_goal: Maximum queue length
            as_of: Session start time
            group_id: Group the session drills, if any

        Returns:
            A new Active session
        """
        selected = level_scheduler.select_due(candidates, as_of)
        if not selected:
            selected = level_scheduler.sort_by_level(candidates)
            logger.info(f"No items due, practicing ahead with {len(selected)} items")

        queue = self._queue_engine.build_initial_queue(selected, session_goal)
        session = Session(
            started_at=as_of,
            group_id=group_id,
            candidate_ids=[entry.item_id for entry in queue],
            queue=queue,
        )
        logger.info(f"Started session {session.id} with {len(queue)} items")
        return session

    def complete(
        self,
        session: Session,
        items: Mapping[str, VocabularyItem],
        groups: list[Group],
        progress: LearnerProgress,
        completed_at: datetime,
    ) -> CompletionResult:
        """Grade a session and apply its effects.

        Every new value is computed first and only then written back,
        so a failure leaves items, groups, progress and the session
        exactly as they were.

        Args:
            session: Active session to complete
            items: Item lookup by id
            groups: All groups in unlock order
            progress: Learner-wide progress
            completed_at: Completion time

        Returns:
            CompletionResult summarizing the effects

        Raises:
            PreconditionViolation: If the session is already completed
            NotFoundError: If an answered item or the session's group is unknown
        """
        if not session.is_active:
            raise PreconditionViolation(f"Session {session.id} is already completed")

        level_changes = self._plan_level_changes(session, items, completed_at)
        group_update = self._plan_group_update(session, items, groups)
        today = calendar_date(completed_at)
        streak = next_daily_streak(progress.daily_streak, progress.last_session_date, today)
        learned, overall = self._plan_overall(items, level_changes)

        # Commit
        for item_id, change in level_changes.items():
            item = items[item_id]
            item.level = change.new_level
            item.next_review_date = change.next_review_date
            item.last_review_date = completed_at

        unlocked_group_id = None
        if group_update is not None:
            group_update.group.completed_sessions = group_update.completed_sessions
            group_update.group.accuracy = group_update.accuracy
            if group_update.unlock is not None:
                group_update.unlock.unlocked = True
                unlocked_group_id = group_update.unlock.id
                logger.info(f"Unlocked group {group_update.unlock.name}")

        progress.daily_streak = streak
        progress.last_session_date = today
        progress.total_items_learned = learned
        progress.overall_accuracy = overall

        session.queue = []
        session.completed_at = completed_at
        session.state = SessionState.COMPLETED

        logger.info(
            f"Completed session {session.id}: accuracy={session.accuracy}% "
            f"answers={len(session.answers)} mastered={len(session.mastered_ids)}"
        )

        return CompletionResult(
            accuracy=session.accuracy,
            level_changes_by_item=level_changes,
            unlocked_group_id=unlocked_group_id,
            daily_streak=streak,
            mastered_count=len(session.mastered_ids),
            total_answers=len(session.answers),
        )

    def _plan_level_changes(
        self,
        session: Session,
        items: Mapping[str, VocabularyItem],
        completed_at: datetime,
    ) -> dict[str, LevelChange]:
        # Any wrong answer drops the item, even after earlier correct ones.
        missed = {record.item_id for record in session.answers if not record.correct}
        mastered = set(session.mastered_ids)

        changes: dict[str, LevelChange] = {}
        for item_id in session.touched_ids:
            item = items.get(item_id)
            if item is None:
                raise NotFoundError(f"Answered item {item_id} is missing from the context")

            if item_id in mastered:
                new_level = level_scheduler.advance(item.level)
            elif item_id in missed:
                new_level = level_scheduler.drop(item.level)
            else:
                new_level = item.level

            changes[item_id] = LevelChange(
                old_level=item.level,
                new_level=new_level,
                next_review_date=level_scheduler.compute_next_review_date(
                    new_level, session.started_at
                ),
            )
        return changes

    def _plan_group_update(
        self,
        session: Session,
        items: Mapping[str, VocabularyItem],
        groups: list[Group],
    ) -> _GroupUpdate | None:
        if session.group_id is None:
            return None

        index = next((i for i, g in enumerate(groups) if g.id == session.group_id), None)
        if index is None:
            raise NotFoundError(f"Group {session.group_id} not found")
        group = groups[index]

        members = [items[i] for i in group.item_ids if i in items]
        accuracy = calculate_accuracy(
            sum(item.total_correct for item in members),
            sum(item.total_attempts for item in members),
        )
        completed_sessions = group.completed_sessions + 1

        unlock = None
        if (
            accuracy >= self.config.unlock_accuracy_threshold
            and completed_sessions >= self.config.unlock_min_sessions
            and index + 1 < len(groups)
            and not groups[index + 1].unlocked
        ):
            unlock = groups[index + 1]

        return _GroupUpdate(group, completed_sessions, accuracy, unlock)

    @staticmethod
    def _plan_overall(
        items: Mapping[str, VocabularyItem],
        level_changes: Mapping[str, LevelChange],
    ) -> tuple[int, int]:
        learned = 0
        for item_id, item in items.items():
            change = level_changes.get(item_id)
            level = change.new_level if change else item.level
            if derive_status(level, item.total_attempts) == ItemStatus.LEARNED:
                learned += 1
        overall = calculate_accuracy(
            sum(item.total_correct for item in items.values()),
            sum(item.total_attempts for item in items.values()),
        )
        return learned, overall
