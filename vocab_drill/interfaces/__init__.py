"""Interface protocols for Vocab Drill."""

from .persistence import PersistenceSink
from .presenter import PresenterProtocol
from .progress import ProgressCallback
from .random_source import RandomSource
from .sentence_provider import SentenceProvider

__all__ = [
    "PersistenceSink",
    "PresenterProtocol",
    "ProgressCallback",
    "RandomSource",
    "SentenceProvider",
]
