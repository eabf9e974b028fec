"""Calendar helpers for day-granularity scheduling."""

from datetime import date, datetime


def calendar_date(value: datetime | date) -> date:
    """Truncate a timestamp to its calendar day.

    Args:
        value: A datetime or date

    Returns:
        The calendar date (time of day dropped)
    """
    if isinstance(value, datetime):
        return value.date()
    return value


def days_between(earlier: datetime | date, later: datetime | date) -> int:
    """Count calendar days from one timestamp to another.

    Args:
        earlier: Start timestamp
        later: End timestamp

    Returns:
        Whole calendar days between the two (negative if reversed)
    """
    return (calendar_date(later) - calendar_date(earlier)).days


def add_years(value: datetime, years: int) -> datetime:
    """Add whole years to a datetime, clamping Feb 29 to Feb 28.

    Args:
        value: Base datetime
        years: Years to add

    Returns:
        Shifted datetime
    """
    try:
        return value.replace(year=value.year + years)
    except ValueError:
        return value.replace(year=value.year + years, day=28)
