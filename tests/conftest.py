"""Pytest configuration and shared fixtures."""

from datetime import datetime

import pytest

from vocab_drill.config import VocabDrillConfig
from vocab_drill.models import Group, VocabularyItem
from vocab_drill.presenters import NullPresenter, NullProgressCallback

NOW = datetime(2024, 3, 15, 9, 30)


@pytest.fixture
def temp_dir(tmp_path):
    """Provide a temporary directory for test files."""
    return tmp_path


@pytest.fixture
def test_config(temp_dir):
    """Provide a test configuration with temporary paths."""
    return VocabDrillConfig(
        session_goal=50,
        group_size=3,  # Small groups keep fixtures short
        data_dir=temp_dir,
        db_path=temp_dir / "vocab.db",
        sentence_batch_delay=0.0,
        sentence_retry_delay=0.0,
        random_seed=1,
    )


@pytest.fixture
def now():
    """Provide a fixed reference time."""
    return NOW


@pytest.fixture
def null_presenter():
    """Provide a null presenter for testing (no output)."""
    return NullPresenter()


@pytest.fixture
def null_progress():
    """Provide a null progress callback for testing."""
    return NullProgressCallback()


@pytest.fixture
def make_item():
    """Factory fixture for creating VocabularyItem instances with sensible defaults."""
    counter = iter(range(1, 10_000))

    def _make(
        term="casa",
        translation="house",
        level=0,
        total_attempts=0,
        total_correct=None,
        next_review_date=None,
        created_at=NOW,
        muted=False,
        group_id=None,
        item_id=None,
        example_sentences=None,
    ):
        if total_correct is None:
            total_correct = total_attempts
        return VocabularyItem(
            term=term,
            translation=translation,
            id=item_id or f"item-{next(counter)}",
            group_id=group_id,
            example_sentences=example_sentences or [],
            level=level,
            created_at=created_at,
            next_review_date=next_review_date,
            total_attempts=total_attempts,
            total_correct=total_correct,
            total_wrong=total_attempts - total_correct,
            muted=muted,
        )

    return _make


@pytest.fixture
def make_group():
    """Factory fixture for creating Group instances from items."""

    def _make(name="Set 1", items=(), unlocked=True, group_id=None, **kwargs):
        group = Group(
            name=name,
            item_ids=[item.id for item in items],
            unlocked=unlocked,
            **kwargs,
        )
        if group_id:
            group.id = group_id
        for item in items:
            item.group_id = group.id
        return group

    return _make


class FixedRandom:
    """A RandomSource that always returns the low bound, or scripted values."""

    def __init__(self, values=None):
        self.values = list(values or [])
        self.calls = []

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        if self.values:
            return self.values.pop(0)
        return a


@pytest.fixture
def fixed_rng():
    """Provide a deterministic random source returning the low bound."""
    return FixedRandom()


@pytest.fixture
def make_rng():
    """Factory fixture for random sources returning scripted values."""
    return FixedRandom


class RecordingProgress:
    """A real ProgressCallback implementation that records all calls for assertion."""

    def __init__(self):
        self.starts = []
        self.progresses = []
        self.completes = 0
        self.errors = []

    def on_start(self, total: int, description: str) -> None:
        self.starts.append((total, description))

    def on_progress(self, current: int, item_description: str) -> None:
        self.progresses.append((current, item_description))

    def on_complete(self) -> None:
        self.completes += 1

    def on_error(self, item_description: str, error_message: str) -> None:
        self.errors.append((item_description, error_message))


@pytest.fixture
def recording_progress():
    """Provide a progress callback that records all calls for assertion."""
    return RecordingProgress()


class RecordingPresenter(NullPresenter):
    """A presenter that records warnings and errors for assertion."""

    def __init__(self):
        self.warnings = []
        self.errors = []

    def show_warning(self, message: str) -> None:
        self.warnings.append(message)

    def show_error(self, message: str) -> None:
        self.errors.append(message)


@pytest.fixture
def recording_presenter():
    """Provide a presenter that records warnings and errors."""
    return RecordingPresenter()


@pytest.fixture
def sample_csv_content():
    """Provide a small headed vocabulary file."""
    return """Portuguese,English
casa,house
cão,dog
pão,bread
obrigado,thank you
maçã,apple
"""


@pytest.fixture
def sample_csv_file(temp_dir, sample_csv_content):
    """Create a sample vocabulary file for testing."""
    path = temp_dir / "words.csv"
    path.write_text(sample_csv_content, encoding="utf-8")
    return path
