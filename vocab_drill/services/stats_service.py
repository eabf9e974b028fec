"""Service for summarizing learning progress."""

from collections import Counter
from collections.abc import Iterable, Mapping
from datetime import datetime

from vocab_drill.models import Group, GroupStats, ItemStatus, OverallStats, VocabularyItem
from vocab_drill.services import level_scheduler
from vocab_drill.utils.text_utils import calculate_accuracy


class StatsService:
    """Compute per-group and overall statistics from item counters.

    Stateless: every figure is derived from the items passed in, so
    the numbers always agree with the engine's current state.
    """

    def group_stats(
        self,
        group: Group,
        items: Mapping[str, VocabularyItem],
        as_of: datetime,
    ) -> GroupStats:
        """Summarize one group.

        Args:
            group: Group to summarize
            items: Item lookup by id
            as_of: Reference time for due counting

        Returns:
            GroupStats with size, due count and lifetime accuracy
        """
        members = [items[i] for i in group.item_ids if i in items]
        due = level_scheduler.select_due(members, as_of)
        return GroupStats(
            group_id=group.id,
            name=group.name,
            total_items=len(members),
            due_items=len(due),
            accuracy=calculate_accuracy(
                sum(item.total_correct for item in members),
                sum(item.total_attempts for item in members),
            ),
            unlocked=group.unlocked,
            completed_sessions=group.completed_sessions,
        )

    def overall_stats(self, items: Iterable[VocabularyItem]) -> OverallStats:
        """Summarize all items.

        Args:
            items: Items to summarize

        Returns:
            OverallStats with status counts, accuracy and level histogram
        """
        items = list(items)
        statuses = Counter(item.status for item in items)
        attempts = sum(item.total_attempts for item in items)
        correct = sum(item.total_correct for item in items)
        histogram = Counter(item.level for item in items)

        return OverallStats(
            total_items=len(items),
            new_items=statuses[ItemStatus.NEW],
            learning_items=statuses[ItemStatus.LEARNING],
            learned_items=statuses[ItemStatus.LEARNED],
            muted_items=sum(1 for item in items if item.muted),
            total_attempts=attempts,
            total_correct=correct,
            overall_accuracy=calculate_accuracy(correct, attempts),
            level_histogram={level: histogram[level] for level in sorted(histogram)},
        )
