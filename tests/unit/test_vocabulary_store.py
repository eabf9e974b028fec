"""Tests for VocabularyStore."""

import sqlite3
from datetime import date, datetime

import pytest

from vocab_drill.exceptions import PersistenceError
from vocab_drill.models import AnswerRecord, Group, LearnerProgress, Session, SessionState
from vocab_drill.services import VocabularyStore


@pytest.fixture
def store(test_config):
    store = VocabularyStore(test_config.db_path)
    store.initialize()
    return store


class TestInitialize:
    """Tests for initialize method."""

    def test_creates_database_file(self, tmp_path):
        """Should create the database file and parent directories."""
        db_path = tmp_path / "subdir" / "vocab.db"
        VocabularyStore(db_path).initialize()
        assert db_path.exists()

    def test_idempotent(self, store, make_item):
        """Should not drop existing data when called again."""
        store.save_items([make_item()])
        store.initialize()
        assert store.item_count() == 1

    def test_unavailable_before_initialize(self, tmp_path):
        store = VocabularyStore(tmp_path / "none.db")
        assert store.is_available() is False
        with pytest.raises(PersistenceError):
            store.load_items()


class TestItems:
    """Tests for item persistence."""

    def test_round_trip(self, store, make_item, now):
        item = make_item(
            term="maçã",
            translation="apple",
            level=3,
            total_attempts=5,
            total_correct=4,
            example_sentences=["Eu como uma maçã."],
            group_id="g1",
        )
        item.last_review_date = now

        store.save_items([item])
        (loaded,) = store.load_items()

        assert loaded == item

    def test_upsert_updates_in_place(self, store, make_item):
        item = make_item()
        store.save_items([item])
        item.level = 4
        item.muted = True
        store.save_items([item])

        (loaded,) = store.load_items()
        assert store.item_count() == 1
        assert loaded.level == 4
        assert loaded.muted is True

    def test_keeps_insert_order(self, store, make_item):
        first = [make_item(term="a"), make_item(term="b")]
        store.save_items(first)
        store.save_items([make_item(term="c")])
        store.save_items([first[0]])  # Update should not move it
        assert [i.term for i in store.load_items()] == ["a", "b", "c"]

    def test_empty_list(self, store):
        store.save_items([])
        assert store.item_count() == 0


class TestGroups:
    """Tests for group persistence."""

    def test_round_trip_in_order(self, store):
        groups = [
            Group(name="Set 1", item_ids=["a", "b"], unlocked=True, completed_sessions=2, accuracy=85),
            Group(name="Set 2", item_ids=["c"]),
        ]
        store.save_groups(groups)
        assert store.load_groups() == groups


class TestProgress:
    """Tests for progress persistence."""

    def test_default_when_missing(self, store):
        progress = store.load_progress(default_goal=30)
        assert progress == LearnerProgress(session_goal=30)

    def test_round_trip(self, store):
        progress = LearnerProgress(
            daily_streak=4,
            last_session_date=date(2024, 3, 14),
            session_goal=25,
            total_items_learned=12,
            overall_accuracy=81,
        )
        store.save_progress(progress)
        store.save_progress(progress)
        assert store.load_progress() == progress


class TestSessions:
    """Tests for session persistence."""

    def test_round_trip(self, store, now):
        session = Session(started_at=now, group_id="g1", mastered_ids=["a"])
        session.answers.append(AnswerRecord("a", "casa", "casa", True, False, now))
        session.answers.append(AnswerRecord("b", "cao", "cão", False, True, now))
        session.state = SessionState.COMPLETED
        session.completed_at = datetime(2024, 3, 15, 10)

        store.save_session(session)
        (loaded,) = store.load_sessions()

        assert loaded.id == session.id
        assert loaded.answers == session.answers
        assert loaded.mastered_ids == ["a"]
        assert loaded.state == SessionState.COMPLETED

    def test_most_recent_first(self, store):
        old = Session(started_at=datetime(2024, 1, 1))
        new = Session(started_at=datetime(2024, 2, 1))
        store.save_session(old)
        store.save_session(new)
        assert [s.id for s in store.load_sessions(limit=1)] == [new.id]


class TestClearAll:
    """Tests for clear_all method."""

    def test_removes_everything(self, store, make_item, now):
        store.save_items([make_item()])
        store.save_groups([Group(name="Set 1")])
        store.save_progress(LearnerProgress(daily_streak=2))
        store.save_session(Session(started_at=now))

        store.clear_all()

        assert store.load_items() == []
        assert store.load_groups() == []
        assert store.load_sessions() == []
        assert store.load_progress().daily_streak == 0


class TestErrors:
    """Tests for database error wrapping."""

    def test_write_error_wrapped(self, store, make_item, test_config):
        with sqlite3.connect(str(test_config.db_path)) as conn:
            conn.execute("DROP TABLE items")
        with pytest.raises(PersistenceError):
            store.save_items([make_item()])


class TrackingConnection(sqlite3.Connection):
    """sqlite3 connection that records whether it was closed."""

    opened: list["TrackingConnection"] = []

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.was_closed = False
        TrackingConnection.opened.append(self)

    def close(self):
        self.was_closed = True
        super().close()


class TestConnectionHandling:
    """Tests that every call releases its connection."""

    @pytest.fixture
    def tracked(self, monkeypatch):
        real_connect = sqlite3.connect
        TrackingConnection.opened = []
        monkeypatch.setattr(
            sqlite3, "connect", lambda path: real_connect(path, factory=TrackingConnection)
        )
        return TrackingConnection.opened

    def test_writes_and_reads_close_connections(self, tracked, tmp_path, make_item, now):
        store = VocabularyStore(tmp_path / "vocab.db")
        store.initialize()
        store.save_items([make_item()])
        store.save_groups([Group(name="Set 1")])
        store.save_session(Session(started_at=now))
        store.save_progress(LearnerProgress())
        store.load_items()
        store.clear_all()

        assert len(tracked) == 7
        assert all(conn.was_closed for conn in tracked)

    def test_failed_write_closes_connection(self, tracked, store, make_item, test_config):
        with sqlite3.connect(str(test_config.db_path)) as conn:
            conn.execute("DROP TABLE items")
        tracked.clear()

        with pytest.raises(PersistenceError):
            store.save_items([make_item()])

        assert tracked and all(conn.was_closed for conn in tracked)
