"""Service for importing vocabulary pairs from delimited text files."""

import csv
import io
import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from statistics import pvariance

from vocab_drill.config import VocabDrillConfig
from vocab_drill.exceptions import InvalidInputError, SetupError
from vocab_drill.models import Group, VocabularyItem
from vocab_drill.utils.text_utils import fold_answer

logger = logging.getLogger(__name__)

CANDIDATE_DELIMITERS = [",", "\t", ";", "|"]
SNIFF_LINES = 5
SCORE_ROWS = 10

HEADER_KEYWORDS = {
    "portuguese",
    "português",
    "english",
    "inglês",
    "pt",
    "en",
    "word",
    "palavra",
    "term",
    "translation",
}
TERM_HEADER_HINTS = ("port", "pt", "term", "palavra")
TRANSLATION_HEADER_HINTS = ("eng", "en", "translation", "meaning")

TARGET_DIACRITICS = re.compile(r"[ãáàâéêíóôõúüç]", re.IGNORECASE)
TARGET_COMMON_WORDS = re.compile(
    r"\b(o|a|os|as|de|da|do|para|com|em|um|uma|não|sim|por|que|eu|você|ele|ela)\b",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class WordPair:
    """A term and its translation as read from a file."""

    term: str
    translation: str


@dataclass
class ParsedTable:
    """Rows of a delimited file with the detected layout."""

    rows: list[list[str]]
    delimiter: str = ","
    term_column: int = 0
    translation_column: int = 1
    confidence: str = "low"  # "high", "medium" or "low"
    has_header: bool = False
    pairs: list[WordPair] = field(default_factory=list)


class ImportService:
    """Parse vocabulary files and turn pairs into items and groups."""

    def __init__(self, config: VocabDrillConfig):
        """Initialize the import service.

        Args:
            config: Configuration providing the group size
        """
        self.config = config

    def parse_file(self, path: Path) -> ParsedTable:
        """Read and parse a vocabulary file.

        Args:
            path: Path to a CSV/TSV/semicolon/pipe-delimited file

        Returns:
            ParsedTable with detected layout and extracted pairs

        Raises:
            SetupError: If the file is missing or unreadable
            InvalidInputError: If no usable pairs were found
        """
        if not path.exists():
            raise SetupError(f"Vocabulary file not found: {path}")
        try:
            content = path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            raise SetupError(f"Error reading vocabulary file {path}: {e}") from e
        return self.parse_text(content)

    def parse_text(self, content: str) -> ParsedTable:
        """Parse delimited text with delimiter, header and column detection.

        Args:
            content: File contents

        Returns:
            ParsedTable with detected layout and extracted pairs

        Raises:
            InvalidInputError: If no usable pairs were found
        """
        delimiter = detect_delimiter(content)
        reader = csv.reader(io.StringIO(content), delimiter=delimiter)
        rows = [[cell.strip() for cell in row] for row in reader if any(c.strip() for c in row)]

        table = ParsedTable(rows=rows, delimiter=delimiter, has_header=has_header(rows))
        data_rows = rows[1:] if table.has_header else rows
        header = rows[0] if table.has_header else None
        table.term_column, table.translation_column, table.confidence = detect_columns(
            data_rows, header
        )
        table.pairs = self._extract_pairs(data_rows, table.term_column, table.translation_column)

        if not table.pairs:
            raise InvalidInputError("No vocabulary pairs found in file")

        logger.info(
            f"Parsed {len(table.pairs)} pairs (delimiter={delimiter!r}, "
            f"header={table.has_header}, confidence={table.confidence})"
        )
        return table

    @staticmethod
    def _extract_pairs(rows: list[list[str]], term_col: int, translation_col: int) -> list[WordPair]:
        pairs: list[WordPair] = []
        seen: set[str] = set()
        width = max(term_col, translation_col) + 1
        for row in rows:
            if len(row) < width:
                continue
            term, translation = row[term_col], row[translation_col]
            if not term or not translation:
                continue
            key = fold_answer(term)
            if key in seen:
                logger.debug(f"Skipping duplicate term {term!r}")
                continue
            seen.add(key)
            pairs.append(WordPair(term=term, translation=translation))
        return pairs

    def build_items(
        self,
        pairs: list[WordPair],
        created_at: datetime,
        sentences: dict[str, list[str]] | None = None,
    ) -> tuple[list[VocabularyItem], list[Group]]:
        """Create new items and chunk them into groups in file order.

        Only the first group starts unlocked.

        Args:
            pairs: Pairs to import
            created_at: Creation time (new items are due immediately)
            sentences: Optional example sentences keyed by term

        Returns:
            Tuple of (items, groups)
        """
        sentences = sentences or {}
        size = max(self.config.group_size, 1)
        items: list[VocabularyItem] = []
        groups: list[Group] = []

        for start in range(0, len(pairs), size):
            chunk = pairs[start : start + size]
            group = Group(name=f"Set {start // size + 1}", unlocked=not groups)
            for pair in chunk:
                item = VocabularyItem(
                    term=pair.term,
                    translation=pair.translation,
                    group_id=group.id,
                    example_sentences=list(sentences.get(pair.term, [])),
                    created_at=created_at,
                )
                items.append(item)
                group.item_ids.append(item.id)
            groups.append(group)

        logger.info(f"Created {len(items)} items in {len(groups)} groups")
        return items, groups


def detect_delimiter(content: str) -> str:
    """Detect the delimiter of a text table.

    Picks the candidate with the highest average count per line over
    the first few lines, breaking ties by the lowest variance.

    Args:
        content: File contents

    Returns:
        One of ",", "\\t", ";" or "|"
    """
    lines = content.splitlines()[:SNIFF_LINES] or [""]
    scored = []
    for delim in CANDIDATE_DELIMITERS:
        counts = [line.count(delim) for line in lines]
        avg = sum(counts) / len(counts)
        scored.append((-avg, pvariance(counts), CANDIDATE_DELIMITERS.index(delim), delim))
    return min(scored)[3]


def has_header(rows: list[list[str]]) -> bool:
    """Guess whether the first row is a header.

    True if any first-row cell is a known header keyword such as
    "english" or "palavra".

    Args:
        rows: Parsed rows

    Returns:
        True if the first row looks like a header
    """
    if len(rows) < 2:
        return False
    return any(cell.strip().lower() in HEADER_KEYWORDS for cell in rows[0])


def _target_score(rows: list[list[str]], column: int) -> int:
    score = 0
    for row in rows[:SCORE_ROWS]:
        if column >= len(row) or not row[column]:
            continue
        text = row[column].lower()
        if TARGET_DIACRITICS.search(text):
            score += 2
        if TARGET_COMMON_WORDS.search(text):
            score += 1
    return score


def detect_columns(rows: list[list[str]], header: list[str] | None = None) -> tuple[int, int, str]:
    """Detect which of the first two columns holds the term.

    Header names win when present; otherwise the column with more
    target-language signals (diacritics, common function words) is
    taken as the term column.

    Args:
        rows: Data rows (header excluded)
        header: Header row, if the file has one

    Returns:
        Tuple of (term_column, translation_column, confidence)
    """
    if header and len(header) >= 2:
        first, second = header[0].lower(), header[1].lower()
        if any(first.startswith(h) for h in TERM_HEADER_HINTS):
            return 0, 1, "high"
        if any(second.startswith(h) for h in TERM_HEADER_HINTS):
            return 1, 0, "high"
        if any(first.startswith(h) for h in TRANSLATION_HEADER_HINTS):
            return 1, 0, "high"
        if any(second.startswith(h) for h in TRANSLATION_HEADER_HINTS):
            return 0, 1, "high"

    if not rows or max(len(row) for row in rows) < 2:
        return 0, 1, "low"

    score0, score1 = _target_score(rows, 0), _target_score(rows, 1)
    diff = abs(score0 - score1)
    confidence = "high" if diff >= 5 else "medium" if diff >= 2 else "low"

    if score1 > score0:
        return 1, 0, confidence
    return 0, 1, confidence
