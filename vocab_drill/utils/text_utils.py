"""Text processing utilities."""

import math
import unicodedata


def fold_answer(text: str) -> str:
    """Trim and case-fold an answer for exact comparison.

    Args:
        text: Raw answer text

    Returns:
        Trimmed, case-folded NFC text (diacritics preserved)
    """
    return unicodedata.normalize("NFC", text.strip().casefold())


def strip_diacritics(text: str) -> str:
    """Remove combining marks (accents, cedillas, tildes) from text.

    Args:
        text: Text potentially containing accented characters

    Returns:
        Text decomposed with NFD and stripped of combining marks
    """
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize_answer(text: str) -> str:
    """Normalize an answer for tolerant comparison.

    Args:
        text: Raw answer text

    Returns:
        Trimmed, case-folded text with diacritics removed
    """
    return strip_diacritics(fold_answer(text))


def accent_difference(answer: str, expected: str) -> str:
    """Find the first character where an answer differs from the expected text.

    Used for feedback such as "Almost! Watch the accent: á". Only
    meaningful when both strings have the same length after folding.

    Args:
        answer: The learner's answer
        expected: The expected answer

    Returns:
        The expected character at the first differing position, or ""
    """
    answer_chars = fold_answer(answer)
    expected_chars = fold_answer(expected)

    if len(answer_chars) != len(expected_chars):
        return ""

    for given, wanted in zip(answer_chars, expected_chars):
        if given != wanted:
            return wanted

    return ""


def calculate_accuracy(correct: int, total: int) -> int:
    """Calculate an accuracy percentage rounded half-up.

    Args:
        correct: Number of correct answers
        total: Number of answers

    Returns:
        Integer percentage 0-100 (0 when total is 0)
    """
    if total <= 0:
        return 0
    return math.floor(100 * correct / total + 0.5)
