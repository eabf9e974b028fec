"""Facade exposing the drill engine to the surrounding application."""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime

from vocab_drill.config import VocabDrillConfig
from vocab_drill.exceptions import NotFoundError, PreconditionViolation
from vocab_drill.interfaces import PersistenceSink, PresenterProtocol, RandomSource
from vocab_drill.models import (
    AnswerOutcome,
    CompletionResult,
    Group,
    GroupStats,
    LearnerProgress,
    OverallStats,
    QueueEntry,
    Session,
    VocabularyItem,
)
from vocab_drill.orchestration.session_lifecycle import SessionLifecycle
from vocab_drill.services import level_scheduler
from vocab_drill.services.answer_processor import AnswerProcessor
from vocab_drill.services.session_queue import SessionQueueEngine
from vocab_drill.services.stats_service import StatsService

logger = logging.getLogger(__name__)


@dataclass
class EngineContext:
    """Everything the engine operates on, passed in explicitly.

    The engine holds no state of its own beyond this context and the
    sessions handed to it.
    """

    items: dict[str, VocabularyItem] = field(default_factory=dict)
    groups: list[Group] = field(default_factory=list)  # In unlock order
    progress: LearnerProgress = field(default_factory=LearnerProgress)
    rng: RandomSource = field(default_factory=random.Random)
    clock: Callable[[], datetime] = datetime.now

    @classmethod
    def from_items(
        cls,
        items: Iterable[VocabularyItem],
        groups: list[Group] | None = None,
        progress: LearnerProgress | None = None,
        rng: RandomSource | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> EngineContext:
        """Build a context from a flat list of items."""
        return cls(
            items={item.id: item for item in items},
            groups=groups if groups is not None else [],
            progress=progress if progress is not None else LearnerProgress(),
            rng=rng if rng is not None else random.Random(),
            clock=clock if clock is not None else datetime.now,
        )

    def get_item(self, item_id: str) -> VocabularyItem:
        try:
            return self.items[item_id]
        except KeyError:
            raise NotFoundError(f"Item {item_id} not found") from None

    def get_group(self, group_id: str) -> Group:
        for group in self.groups:
            if group.id == group_id:
                return group
        raise NotFoundError(f"Group {group_id} not found")

    def group_items(self, group_id: str) -> list[VocabularyItem]:
        group = self.get_group(group_id)
        return [self.items[i] for i in group.item_ids if i in self.items]


class DrillEngine:
    """Coordinate scheduling, drilling and completion over a context.

    State changes happen in memory first. Persistence runs strictly
    after each change has committed; a failing store is logged and
    reported through the presenter but never rolls the change back.
    """

    def __init__(
        self,
        config: VocabDrillConfig,
        context: EngineContext,
        presenter: PresenterProtocol | None = None,
        persistence: PersistenceSink | None = None,
    ):
        """Initialize the drill engine.

        Args:
            config: Session and unlock policy
            context: Items, groups, progress, random source and clock
            presenter: Optional presenter for persistence warnings
            persistence: Optional store notified after each commit
        """
        self.config = config
        self.context = context
        self.presenter = presenter
        self.persistence = persistence
        self.persistence_errors: list[str] = []

        self.queue_engine = SessionQueueEngine(context.rng)
        self.answer_processor = AnswerProcessor(self.queue_engine)
        self.lifecycle = SessionLifecycle(config, self.queue_engine)
        self.stats_service = StatsService()

    # === Scheduling ===

    def select_due_items(
        self,
        items: Iterable[VocabularyItem] | None = None,
        as_of: datetime | None = None,
    ) -> list[VocabularyItem]:
        """Return non-muted due items, weakest first.

        Args:
            items: Items to filter (defaults to every item in the context)
            as_of: Reference time (defaults to the context clock)
        """
        if items is None:
            items = self.context.items.values()
        return level_scheduler.select_due(items, as_of or self.context.clock())

    def due_items_for_group(self, group_id: str, as_of: datetime | None = None) -> list[VocabularyItem]:
        """Return the due items of one group."""
        return self.select_due_items(self.context.group_items(group_id), as_of)

    # === Session ===

    def start_session(
        self,
        candidate_items: Iterable[VocabularyItem] | None = None,
        session_goal: int | None = None,
        group_id: str | None = None,
    ) -> Session:
        """Start a session.

        Args:
            candidate_items: Items to draw from. Defaults to the items of
                ``group_id``, or to every item when no group is given.
            session_goal: Queue cap (defaults to the learner's goal)
            group_id: Group being drilled; must be unlocked

        Returns:
            A new Active session

        Raises:
            NotFoundError: If ``group_id`` is unknown
            PreconditionViolation: If the group is locked
        """
        if group_id is not None:
            group = self.context.get_group(group_id)
            if not group.unlocked:
                raise PreconditionViolation(f"Group {group.name} is locked")
            if candidate_items is None:
                candidate_items = self.context.group_items(group_id)
        if candidate_items is None:
            candidate_items = list(self.context.items.values())

        goal = session_goal if session_goal is not None else self.context.progress.session_goal
        return self.lifecycle.start(
            list(candidate_items), goal, self.context.clock(), group_id=group_id
        )

    def current_entry(self, session: Session) -> QueueEntry | None:
        """Return the entry being drilled, or None when the session is drained."""
        if not session.is_active:
            return None
        return self.queue_engine.peek_head(session.queue)

    def current_item(self, session: Session) -> VocabularyItem | None:
        """Return the item being drilled, or None when the session is drained."""
        entry = self.current_entry(session)
        return self.context.items.get(entry.item_id) if entry else None

    def submit_answer(self, session: Session, item_id: str, raw_answer: str) -> AnswerOutcome:
        """Judge an answer for the current item and advance the queue.

        Raises:
            PreconditionViolation: Session completed, queue drained, or
                ``item_id`` is not the current entry
            NotFoundError: ``item_id`` is not in the session
            InvalidInputError: Blank answer
        """
        outcome = self.answer_processor.submit(
            session, self.context.items, item_id, raw_answer, self.context.clock()
        )
        self._persist("items", lambda sink: sink.save_items([self.context.items[item_id]]))
        return outcome

    def complete_session(self, session: Session) -> CompletionResult:
        """Complete a session, applying level changes, unlocks and streak.

        Raises:
            PreconditionViolation: If the session is already completed
        """
        result = self.lifecycle.complete(
            session,
            self.context.items,
            self.context.groups,
            self.context.progress,
            self.context.clock(),
        )
        touched = [self.context.items[i] for i in result.level_changes_by_item]
        self._persist("items", lambda sink: sink.save_items(touched))
        self._persist("groups", lambda sink: sink.save_groups(self.context.groups))
        self._persist("session", lambda sink: sink.save_session(session))
        self._persist("progress", lambda sink: sink.save_progress(self.context.progress))
        return result

    # === Item and group management ===

    def mute_item(self, item_id: str, session: Session | None = None) -> VocabularyItem:
        """Exclude an item from future sessions.

        When ``session`` is active the item also leaves its queue, so
        drilling moves on without logging an answer or touching the
        item's counters.

        Raises:
            NotFoundError: If the item is unknown
        """
        item = self.context.get_item(item_id)
        item.muted = True
        if session is not None and session.is_active:
            session.queue = self.queue_engine.remove_item(session.queue, item_id)
            logger.info(f"Muted {item.term!r} during session {session.id}")
        self._persist("items", lambda sink: sink.save_items([item]))
        return item

    def unmute_item(self, item_id: str) -> VocabularyItem:
        """Include a previously muted item in future sessions again."""
        item = self.context.get_item(item_id)
        item.muted = False
        self._persist("items", lambda sink: sink.save_items([item]))
        return item

    def unlock_next_group(self, group_id: str) -> Group | None:
        """Unlock the group after ``group_id`` regardless of accuracy.

        Returns:
            The newly unlocked group, or None if ``group_id`` is the last
            group or its successor is already unlocked
        """
        group = self.context.get_group(group_id)
        index = self.context.groups.index(group)
        if index + 1 >= len(self.context.groups):
            return None
        next_group = self.context.groups[index + 1]
        if next_group.unlocked:
            return None
        next_group.unlocked = True
        self._persist("groups", lambda sink: sink.save_groups(self.context.groups))
        return next_group

    # === Statistics ===

    def group_stats(self, group_id: str, as_of: datetime | None = None) -> GroupStats:
        """Summarize one group."""
        group = self.context.get_group(group_id)
        return self.stats_service.group_stats(group, self.context.items, as_of or self.context.clock())

    def all_group_stats(self, as_of: datetime | None = None) -> list[GroupStats]:
        """Summarize every group in unlock order."""
        as_of = as_of or self.context.clock()
        return [
            self.stats_service.group_stats(group, self.context.items, as_of)
            for group in self.context.groups
        ]

    def overall_stats(self) -> OverallStats:
        """Summarize all items."""
        return self.stats_service.overall_stats(self.context.items.values())

    # === Persistence ===

    def _persist(self, what: str, action: Callable[[PersistenceSink], None]) -> bool:
        if self.persistence is None:
            return True
        try:
            action(self.persistence)
            return True
        except Exception as e:
            logger.exception(f"Failed to save {what}")
            message = f"Could not save {what}: {e}"
            self.persistence_errors.append(message)
            if self.presenter is not None:
                self.presenter.show_warning(message)
            return False
