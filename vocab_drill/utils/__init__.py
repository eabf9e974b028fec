"""Utility functions for Vocab Drill."""

from .date_utils import add_years, calendar_date, days_between
from .text_utils import (
    accent_difference,
    calculate_accuracy,
    fold_answer,
    normalize_answer,
    strip_diacritics,
)

__all__ = [
    "add_years",
    "calendar_date",
    "days_between",
    "accent_difference",
    "calculate_accuracy",
    "fold_answer",
    "normalize_answer",
    "strip_diacritics",
]
