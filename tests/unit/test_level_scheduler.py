"""Tests for level_scheduler module."""

from datetime import datetime, timedelta

import pytest

from vocab_drill.exceptions import InvalidLevelError
from vocab_drill.services import level_scheduler


class TestIntervalDays:
    """Tests for interval_days function."""

    @pytest.mark.parametrize(
        "level,days",
        [(0, 0), (1, 1), (2, 3), (3, 7), (4, 14), (5, 30), (6, 60), (7, 120)],
    )
    def test_fixed_intervals(self, level, days):
        """Should map each level to its fixed interval."""
        assert level_scheduler.interval_days(level) == days

    def test_terminal_level_has_no_interval(self):
        """Level 8 should have no finite interval."""
        assert level_scheduler.interval_days(8) is None

    @pytest.mark.parametrize("level", [-1, 9, 100])
    def test_out_of_range_rejected(self, level):
        """Levels outside 0-8 should raise InvalidLevelError."""
        with pytest.raises(InvalidLevelError):
            level_scheduler.interval_days(level)

    def test_non_integer_rejected(self):
        """Non-integer levels should raise InvalidLevelError."""
        with pytest.raises(InvalidLevelError):
            level_scheduler.interval_days(1.5)

    def test_invalid_level_is_value_error(self):
        """InvalidLevelError should also be a ValueError."""
        with pytest.raises(ValueError):
            level_scheduler.interval_days(-1)


class TestComputeNextReviewDate:
    """Tests for compute_next_review_date function."""

    def test_level_zero_is_same_moment(self, now):
        """Level 0 should be due immediately."""
        assert level_scheduler.compute_next_review_date(0, now) == now

    def test_level_three_adds_a_week(self, now):
        """Level 3 should add 7 days."""
        assert level_scheduler.compute_next_review_date(3, now) == now + timedelta(days=7)

    def test_level_seven(self, now):
        """Level 7 should add 120 days."""
        assert level_scheduler.compute_next_review_date(7, now) == now + timedelta(days=120)

    def test_terminal_level_ten_years_out(self, now):
        """Level 8 should push the review ten years out."""
        result = level_scheduler.compute_next_review_date(8, now)
        assert result == now.replace(year=now.year + 10)

    def test_terminal_level_from_leap_day(self):
        """Feb 29 should clamp to Feb 28 ten years later."""
        leap = datetime(2024, 2, 29, 12, 0)
        result = level_scheduler.compute_next_review_date(8, leap)
        assert result == datetime(2034, 2, 28, 12, 0)

    def test_invalid_level(self, now):
        """Invalid levels should raise InvalidLevelError."""
        with pytest.raises(InvalidLevelError):
            level_scheduler.compute_next_review_date(9, now)


class TestAdvanceAndDrop:
    """Tests for advance and drop functions."""

    def test_advance_one_step(self):
        assert level_scheduler.advance(2) == 3

    def test_advance_capped(self):
        """Advancing the terminal level should stay at 8."""
        assert level_scheduler.advance(8) == 8

    def test_drop_two_steps(self):
        assert level_scheduler.drop(5) == 3

    @pytest.mark.parametrize("level", [0, 1])
    def test_drop_floored(self, level):
        """Dropping near the bottom should floor at 0."""
        assert level_scheduler.drop(level) == 0

    def test_drop_terminal(self):
        assert level_scheduler.drop(8) == 6

    def test_advance_rejects_invalid(self):
        with pytest.raises(InvalidLevelError):
            level_scheduler.advance(-1)


class TestIsDue:
    """Tests for is_due function."""

    def test_due_later_same_day(self, make_item, now):
        """An item due later today should count as due (day granularity)."""
        item = make_item(next_review_date=now.replace(hour=23, minute=59))
        assert level_scheduler.is_due(item, now.replace(hour=0, minute=1)) is True

    def test_not_due_tomorrow(self, make_item, now):
        """An item due tomorrow should not be due yet."""
        item = make_item(next_review_date=now + timedelta(days=1))
        assert level_scheduler.is_due(item, now.replace(hour=23, minute=59)) is False

    def test_overdue(self, make_item, now):
        item = make_item(next_review_date=now - timedelta(days=30))
        assert level_scheduler.is_due(item, now) is True

    def test_missing_date_is_due(self, make_item, now):
        """An item with no review date should be treated as due."""
        item = make_item()
        item.next_review_date = None
        assert level_scheduler.is_due(item, now) is True


class TestSelectDue:
    """Tests for select_due function."""

    def test_sorted_by_level_stable(self, make_item, now):
        """Should sort ascending by level, keeping input order for ties."""
        a = make_item(term="a", level=3)
        b = make_item(term="b", level=1)
        c = make_item(term="c", level=3)
        d = make_item(term="d", level=1)
        result = level_scheduler.select_due([a, b, c, d], now)
        assert [i.term for i in result] == ["b", "d", "a", "c"]

    def test_excludes_muted(self, make_item, now):
        """Muted items should never be selected."""
        due = make_item(term="due")
        muted = make_item(term="muted", muted=True)
        assert level_scheduler.select_due([due, muted], now) == [due]

    def test_excludes_future(self, make_item, now):
        later = make_item(next_review_date=now + timedelta(days=3))
        assert level_scheduler.select_due([later], now) == []

    def test_empty(self, now):
        assert level_scheduler.select_due([], now) == []

    def test_deterministic(self, make_item, now):
        """Identical inputs should produce identical output."""
        items = [make_item(term=str(i), level=i % 3) for i in range(10)]
        first = level_scheduler.select_due(items, now)
        second = level_scheduler.select_due(items, now)
        assert [i.id for i in first] == [i.id for i in second]


class TestSortByLevel:
    """Tests for sort_by_level function."""

    def test_ignores_due_dates(self, make_item, now):
        """Should include items not yet due, weakest first."""
        a = make_item(term="a", level=4, next_review_date=now + timedelta(days=10))
        b = make_item(term="b", level=2, next_review_date=now + timedelta(days=3))
        assert [i.term for i in level_scheduler.sort_by_level([a, b])] == ["b", "a"]

    def test_excludes_muted(self, make_item):
        item = make_item(muted=True)
        assert level_scheduler.sort_by_level([item]) == []
