"""Tests for date utility functions."""

from datetime import date, datetime

from vocab_drill.utils.date_utils import add_years, calendar_date, days_between


class TestCalendarDate:
    """Tests for calendar_date function."""

    def test_datetime_truncated(self):
        assert calendar_date(datetime(2024, 5, 1, 23, 59)) == date(2024, 5, 1)

    def test_date_unchanged(self):
        assert calendar_date(date(2024, 5, 1)) == date(2024, 5, 1)


class TestDaysBetween:
    """Tests for days_between function."""

    def test_across_midnight(self):
        """Late evening to early morning should be one day apart."""
        assert days_between(datetime(2024, 5, 1, 23, 50), datetime(2024, 5, 2, 0, 10)) == 1

    def test_same_day(self):
        assert days_between(datetime(2024, 5, 1, 1), datetime(2024, 5, 1, 23)) == 0

    def test_mixed_types(self):
        assert days_between(date(2024, 5, 1), datetime(2024, 5, 4, 12)) == 3

    def test_reversed(self):
        assert days_between(date(2024, 5, 4), date(2024, 5, 1)) == -3


class TestAddYears:
    """Tests for add_years function."""

    def test_regular(self):
        assert add_years(datetime(2024, 3, 15, 8), 10) == datetime(2034, 3, 15, 8)

    def test_leap_day(self):
        assert add_years(datetime(2024, 2, 29), 1) == datetime(2025, 2, 28)

    def test_leap_to_leap(self):
        assert add_years(datetime(2024, 2, 29), 4) == datetime(2028, 2, 29)
