"""Configuration classes for Vocab Drill."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class VocabDrillConfig:
    """Immutable configuration for drilling and scheduling.

    All configuration is frozen (immutable) so that the policy cannot
    change underneath an active session.
    """

    # Session settings
    session_goal: int = 50  # Maximum queue entries per session
    group_size: int = 15  # Items per group at import time

    # Group unlock settings
    unlock_accuracy_threshold: int = 80  # Percent, inclusive
    unlock_min_sessions: int = 2

    # Storage settings
    data_dir: Path = field(default_factory=lambda: Path.home() / ".vocab_drill")
    db_path: Path | None = None  # Defaults to data_dir / "vocab.db"

    # Sentence generation settings
    sentence_api_url: str | None = None  # None = template sentences only
    sentence_api_timeout: float = 10.0
    sentence_max_retries: int = 2  # Retries after an HTTP 429
    sentence_retry_delay: float = 3.0  # Seconds to wait after an HTTP 429
    sentence_batch_delay: float = 1.0  # Seconds between API calls
    sentences_per_item: int = 3

    # Reinsertion jitter (None = unseeded)
    random_seed: int | None = None

    def __post_init__(self):
        """Convert string paths to Path objects and fill derived paths."""
        if isinstance(self.data_dir, str):
            object.__setattr__(self, "data_dir", Path(self.data_dir))
        if isinstance(self.db_path, str):
            object.__setattr__(self, "db_path", Path(self.db_path))
        if self.db_path is None:
            object.__setattr__(self, "db_path", self.data_dir / "vocab.db")
