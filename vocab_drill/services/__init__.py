"""Business logic services for Vocab Drill."""

from . import level_scheduler
from .answer_processor import AnswerProcessor, judge_answer
from .import_service import ImportService, ParsedTable, WordPair
from .sentence_service import RemoteSentenceProvider, SentenceService, TemplateSentenceProvider
from .session_queue import SessionQueueEngine
from .stats_service import StatsService
from .vocabulary_store import VocabularyStore

__all__ = [
    "level_scheduler",
    "AnswerProcessor",
    "judge_answer",
    "ImportService",
    "ParsedTable",
    "WordPair",
    "RemoteSentenceProvider",
    "SentenceService",
    "TemplateSentenceProvider",
    "SessionQueueEngine",
    "StatsService",
    "VocabularyStore",
]
