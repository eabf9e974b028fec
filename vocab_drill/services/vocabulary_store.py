"""SQLite-backed storage for items, groups, sessions and progress."""

import json
import logging
import os
import sqlite3
from contextlib import closing, contextmanager
from datetime import date, datetime
from pathlib import Path

from vocab_drill.exceptions import PersistenceError
from vocab_drill.models import (
    AnswerRecord,
    Group,
    LearnerProgress,
    Session,
    SessionState,
    VocabularyItem,
)

logger = logging.getLogger(__name__)


def _dt(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _parse_dt(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


class VocabularyStore:
    """Persistent local store for drill data.

    Implements PersistenceSink protocol. Every write is an upsert by
    id. Each method opens its own connection, matching how the store
    is called once per committed engine change.
    """

    def __init__(self, db_path: Path):
        """Initialize the store.

        Args:
            db_path: Path to the SQLite database file.
        """
        self._db_path = db_path

    def initialize(self) -> None:
        """Create the database and schema if they don't exist.

        Raises:
            PersistenceError: If the database cannot be created.
        """
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            with self._transaction() as conn:
                self._create_tables(conn)
        except (OSError, sqlite3.Error) as e:
            raise PersistenceError(f"Could not initialize database at {self._db_path}: {e}") from e
        logger.info(f"Vocabulary database initialized at {self._db_path}")

    def is_available(self) -> bool:
        """Check if the database file exists and is readable."""
        return self._db_path.exists() and os.access(self._db_path, os.R_OK)

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path))
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def _transaction(self):
        # Commit or roll back, then always close the connection
        with closing(self._connect()) as conn:
            with conn:
                yield conn

    @staticmethod
    def _create_tables(conn: sqlite3.Connection) -> None:
        conn.execute("""
            CREATE TABLE IF NOT EXISTS items (
                id TEXT PRIMARY KEY,
                term TEXT NOT NULL,
                translation TEXT NOT NULL,
                group_id TEXT,
                example_sentences TEXT NOT NULL DEFAULT '[]',
                level INTEGER NOT NULL DEFAULT 0,
                created_at TEXT NOT NULL,
                last_review_date TEXT,
                next_review_date TEXT,
                total_attempts INTEGER NOT NULL DEFAULT 0,
                total_correct INTEGER NOT NULL DEFAULT 0,
                total_wrong INTEGER NOT NULL DEFAULT 0,
                muted INTEGER NOT NULL DEFAULT 0,
                position INTEGER NOT NULL DEFAULT 0
            )
        """)
        conn.execute("""
            CREATE TABLE IF NOT EXISTS groups (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                item_ids TEXT NOT NULL DEFAULT '[]',
                unlocked INTEGER NOT NULL DEFAULT 0,
                completed_sessions INTEGER NOT NULL DEFAULT 0,
                accuracy INTEGER NOT NULL DEFAULT 0,
                position INTEGER NOT NULL DEFAULT 0
            )
        """)
        conn.execute("""
            CREATE TABLE IF NOT EXISTS sessions (
                id TEXT PRIMARY KEY,
                group_id TEXT,
                started_at TEXT NOT NULL,
                completed_at TEXT,
                accuracy INTEGER NOT NULL DEFAULT 0,
                mastered_ids TEXT NOT NULL DEFAULT '[]'
            )
        """)
        conn.execute("""
            CREATE TABLE IF NOT EXISTS answers (
                session_id TEXT NOT NULL,
                seq INTEGER NOT NULL,
                item_id TEXT NOT NULL,
                raw_answer TEXT NOT NULL,
                expected TEXT NOT NULL,
                correct INTEGER NOT NULL,
                near_match INTEGER NOT NULL,
                timestamp TEXT NOT NULL,
                PRIMARY KEY (session_id, seq)
            )
        """)
        conn.execute("""
            CREATE TABLE IF NOT EXISTS progress (
                id INTEGER PRIMARY KEY CHECK (id = 1),
                daily_streak INTEGER NOT NULL DEFAULT 0,
                last_session_date TEXT,
                session_goal INTEGER NOT NULL DEFAULT 50,
                total_items_learned INTEGER NOT NULL DEFAULT 0,
                overall_accuracy INTEGER NOT NULL DEFAULT 0
            )
        """)

    # === Writes ===

    def save_items(self, items: list[VocabularyItem]) -> None:
        """Upsert items by id.

        New items are appended after existing ones so load order
        matches import order.
        """
        if not items:
            return
        try:
            with self._transaction() as conn:
                start = conn.execute("SELECT COALESCE(MAX(position), -1) + 1 FROM items").fetchone()[0]
                for offset, item in enumerate(items):
                    conn.execute(
                        """INSERT INTO items
                           (id, term, translation, group_id, example_sentences, level,
                            created_at, last_review_date, next_review_date,
                            total_attempts, total_correct, total_wrong, muted, position)
                           VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                           ON CONFLICT(id) DO UPDATE SET
                               term = excluded.term,
                               translation = excluded.translation,
                               group_id = excluded.group_id,
                               example_sentences = excluded.example_sentences,
                               level = excluded.level,
                               last_review_date = excluded.last_review_date,
                               next_review_date = excluded.next_review_date,
                               total_attempts = excluded.total_attempts,
                               total_correct = excluded.total_correct,
                               total_wrong = excluded.total_wrong,
                               muted = excluded.muted""",
                        (
                            item.id,
                            item.term,
                            item.translation,
                            item.group_id,
                            json.dumps(item.example_sentences, ensure_ascii=False),
                            item.level,
                            _dt(item.created_at),
                            _dt(item.last_review_date),
                            _dt(item.next_review_date),
                            item.total_attempts,
                            item.total_correct,
                            item.total_wrong,
                            int(item.muted),
                            start + offset,
                        ),
                    )
        except sqlite3.Error as e:
            raise PersistenceError(f"Could not save items: {e}") from e

    def save_groups(self, groups: list[Group]) -> None:
        """Upsert groups by id; list order becomes unlock order."""
        try:
            with self._transaction() as conn:
                for position, group in enumerate(groups):
                    conn.execute(
                        """INSERT INTO groups
                           (id, name, item_ids, unlocked, completed_sessions, accuracy, position)
                           VALUES (?, ?, ?, ?, ?, ?, ?)
                           ON CONFLICT(id) DO UPDATE SET
                               name = excluded.name,
                               item_ids = excluded.item_ids,
                               unlocked = excluded.unlocked,
                               completed_sessions = excluded.completed_sessions,
                               accuracy = excluded.accuracy,
                               position = excluded.position""",
                        (
                            group.id,
                            group.name,
                            json.dumps(group.item_ids),
                            int(group.unlocked),
                            group.completed_sessions,
                            group.accuracy,
                            position,
                        ),
                    )
        except sqlite3.Error as e:
            raise PersistenceError(f"Could not save groups: {e}") from e

    def save_session(self, session: Session) -> None:
        """Store a session and its answer log."""
        try:
            with self._transaction() as conn:
                conn.execute(
                    """INSERT OR REPLACE INTO sessions
                       (id, group_id, started_at, completed_at, accuracy, mastered_ids)
                       VALUES (?, ?, ?, ?, ?, ?)""",
                    (
                        session.id,
                        session.group_id,
                        _dt(session.started_at),
                        _dt(session.completed_at),
                        session.accuracy,
                        json.dumps(session.mastered_ids),
                    ),
                )
                conn.executemany(
                    """INSERT OR IGNORE INTO answers
                       (session_id, seq, item_id, raw_answer, expected, correct,
                        near_match, timestamp)
                       VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
                    [
                        (
                            session.id,
                            seq,
                            record.item_id,
                            record.raw_answer,
                            record.expected,
                            int(record.correct),
                            int(record.near_match),
                            _dt(record.timestamp),
                        )
                        for seq, record in enumerate(session.answers)
                    ],
                )
        except sqlite3.Error as e:
            raise PersistenceError(f"Could not save session {session.id}: {e}") from e

    def save_progress(self, progress: LearnerProgress) -> None:
        """Store learner-wide progress."""
        last = progress.last_session_date.isoformat() if progress.last_session_date else None
        try:
            with self._transaction() as conn:
                conn.execute(
                    """INSERT OR REPLACE INTO progress
                       (id, daily_streak, last_session_date, session_goal,
                        total_items_learned, overall_accuracy)
                       VALUES (1, ?, ?, ?, ?, ?)""",
                    (
                        progress.daily_streak,
                        last,
                        progress.session_goal,
                        progress.total_items_learned,
                        progress.overall_accuracy,
                    ),
                )
        except sqlite3.Error as e:
            raise PersistenceError(f"Could not save progress: {e}") from e

    def clear_all(self) -> None:
        """Delete all stored data, keeping the schema."""
        try:
            with self._transaction() as conn:
                for table in ("items", "groups", "sessions", "answers", "progress"):
                    conn.execute(f"DELETE FROM {table}")
        except sqlite3.Error as e:
            raise PersistenceError(f"Could not clear database: {e}") from e

    # === Reads ===

    def load_items(self) -> list[VocabularyItem]:
        """Return all items in import order."""
        with self._read() as conn:
            rows = conn.execute("SELECT * FROM items ORDER BY position").fetchall()
        return [self._row_to_item(row) for row in rows]

    def load_groups(self) -> list[Group]:
        """Return all groups in unlock order."""
        with self._read() as conn:
            rows = conn.execute("SELECT * FROM groups ORDER BY position").fetchall()
        return [
            Group(
                id=row["id"],
                name=row["name"],
                item_ids=json.loads(row["item_ids"]),
                unlocked=bool(row["unlocked"]),
                completed_sessions=row["completed_sessions"],
                accuracy=row["accuracy"],
            )
            for row in rows
        ]

    def load_progress(self, default_goal: int = 50) -> LearnerProgress:
        """Return stored progress, or a fresh record if none exists."""
        with self._read() as conn:
            row = conn.execute("SELECT * FROM progress WHERE id = 1").fetchone()
        if row is None:
            return LearnerProgress(session_goal=default_goal)
        last = row["last_session_date"]
        return LearnerProgress(
            daily_streak=row["daily_streak"],
            last_session_date=date.fromisoformat(last) if last else None,
            session_goal=row["session_goal"],
            total_items_learned=row["total_items_learned"],
            overall_accuracy=row["overall_accuracy"],
        )

    def load_sessions(self, limit: int = 20) -> list[Session]:
        """Return the most recent completed sessions with their answers."""
        with self._read() as conn:
            rows = conn.execute(
                "SELECT * FROM sessions ORDER BY started_at DESC LIMIT ?", (limit,)
            ).fetchall()
            sessions = []
            for row in rows:
                answers = conn.execute(
                    "SELECT * FROM answers WHERE session_id = ? ORDER BY seq", (row["id"],)
                ).fetchall()
                sessions.append(
                    Session(
                        id=row["id"],
                        group_id=row["group_id"],
                        started_at=_parse_dt(row["started_at"]),
                        completed_at=_parse_dt(row["completed_at"]),
                        mastered_ids=json.loads(row["mastered_ids"]),
                        state=SessionState.COMPLETED
                        if row["completed_at"]
                        else SessionState.ACTIVE,
                        answers=[
                            AnswerRecord(
                                item_id=a["item_id"],
                                raw_answer=a["raw_answer"],
                                expected=a["expected"],
                                correct=bool(a["correct"]),
                                near_match=bool(a["near_match"]),
                                timestamp=_parse_dt(a["timestamp"]),
                            )
                            for a in answers
                        ],
                    )
                )
        return sessions

    def item_count(self) -> int:
        """Return the number of stored items."""
        with self._read() as conn:
            return conn.execute("SELECT COUNT(*) FROM items").fetchone()[0]

    def _read(self) -> closing:
        if not self.is_available():
            raise PersistenceError(f"Database not initialized at {self._db_path}")
        return closing(self._connect())

    @staticmethod
    def _row_to_item(row: sqlite3.Row) -> VocabularyItem:
        return VocabularyItem(
            id=row["id"],
            term=row["term"],
            translation=row["translation"],
            group_id=row["group_id"],
            example_sentences=json.loads(row["example_sentences"]),
            level=row["level"],
            created_at=_parse_dt(row["created_at"]),
            last_review_date=_parse_dt(row["last_review_date"]),
            next_review_date=_parse_dt(row["next_review_date"]),
            total_attempts=row["total_attempts"],
            total_correct=row["total_correct"],
            total_wrong=row["total_wrong"],
            muted=bool(row["muted"]),
        )

