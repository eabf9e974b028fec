"""Level-based long-term review scheduling.

Nine mastery levels (0-8) map to fixed review intervals in days. Level
8 is terminal: its next review is pushed ten years out so that due
selection needs no special case for it.
"""

from collections.abc import Iterable
from datetime import datetime, timedelta

from vocab_drill.exceptions import InvalidLevelError
from vocab_drill.models import VocabularyItem
from vocab_drill.utils.date_utils import add_years, calendar_date

MIN_LEVEL = 0
MAX_LEVEL = 8

# Days until next review for levels 0-7
LEVEL_INTERVALS: tuple[int, ...] = (0, 1, 3, 7, 14, 30, 60, 120)

MASTERED_HORIZON_YEARS = 10

ADVANCE_STEP = 1
DROP_STEP = 2  # Forgetting costs twice what remembering gains


def _check_level(level: int) -> None:
    if not isinstance(level, int) or isinstance(level, bool):
        raise InvalidLevelError(f"Level must be an integer, got {level!r}")
    if not MIN_LEVEL <= level <= MAX_LEVEL:
        raise InvalidLevelError(f"Level must be between {MIN_LEVEL} and {MAX_LEVEL}, got {level}")


def interval_days(level: int) -> int | None:
    """Return the review interval for a level.

    Args:
        level: Mastery level (0-8)

    Returns:
        Interval in days, or None for the terminal level

    Raises:
        InvalidLevelError: If level is outside 0-8
    """
    _check_level(level)
    if level == MAX_LEVEL:
        return None
    return LEVEL_INTERVALS[level]


def compute_next_review_date(level: int, from_date: datetime) -> datetime:
    """Compute when an item at ``level`` should next be reviewed.

    Args:
        level: Mastery level (0-8)
        from_date: Timestamp the interval is measured from

    Returns:
        ``from_date`` plus the level's interval (ten years for level 8)

    Raises:
        InvalidLevelError: If level is outside 0-8
    """
    days = interval_days(level)
    if days is None:
        return add_years(from_date, MASTERED_HORIZON_YEARS)
    return from_date + timedelta(days=days)


def advance(level: int) -> int:
    """Move one level up, capped at the terminal level."""
    _check_level(level)
    return min(level + ADVANCE_STEP, MAX_LEVEL)


def drop(level: int) -> int:
    """Move two levels down, floored at level 0."""
    _check_level(level)
    return max(level - DROP_STEP, MIN_LEVEL)


def is_due(item: VocabularyItem, as_of: datetime) -> bool:
    """Check whether an item's review date has arrived.

    Comparison is by calendar day; time of day is ignored so an item
    does not flip between due and not-due within a single day.

    Args:
        item: Item to check
        as_of: Reference timestamp

    Returns:
        True if the next review date is on or before ``as_of``'s day
    """
    if item.next_review_date is None:
        return True
    return calendar_date(item.next_review_date) <= calendar_date(as_of)


def select_due(items: Iterable[VocabularyItem], as_of: datetime) -> list[VocabularyItem]:
    """Select non-muted due items, weakest first.

    The sort is stable, so items on the same level keep their input
    order and identical inputs always give the same result.

    Args:
        items: Candidate items
        as_of: Reference timestamp

    Returns:
        Due items sorted ascending by level
    """
    due = [item for item in items if not item.muted and is_due(item, as_of)]
    return sorted(due, key=lambda item: item.level)


def sort_by_level(items: Iterable[VocabularyItem]) -> list[VocabularyItem]:
    """Return non-muted items sorted ascending by level (stable)."""
    return sorted((item for item in items if not item.muted), key=lambda item: item.level)
