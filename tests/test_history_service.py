"""Unit tests for the history / audit logger."""

from unittest.mock import MagicMock
from sqlalchemy.exc import OperationalError
from loto.schemas.breaker import BreakerIn
from loto.schemas.history import HistoryIn
from loto.services.history_service import record_action, add_history, list_history, clear_history
from loto.services.lock_reconciliation import create_breaker, delete_breaker


class TestRecordAction:
    def test_store_failure_is_swallowed(self):
        db = MagicMock()
        db.commit.side_effect = OperationalError("INSERT INTO history", {}, Exception("disk I/O error"))

        assert record_action(db, "Breaker X locked") is None
        db.rollback.assert_called_once()

    def test_persists_entry(self, db):
        entry = record_action(db, "Added lock K001", "Zone: Zone A", user_mode="Visitor")
        assert entry.id is not None
        assert entry.user_mode == "Visitor"
        assert entry.timestamp is not None


class TestListHistory:
    def test_newest_first_with_limit(self, db):
        for i in range(5):
            record_action(db, f"action {i}")

        assert [e["action"] for e in list_history(db)] == [f"action {i}" for i in range(4, -1, -1)]
        assert [e["action"] for e in list_history(db, limit=2)] == ["action 4", "action 3"]
        assert len(list_history(db, limit=0)) == 5
        assert len(list_history(db, limit=-1)) == 5

    def test_joins_breaker_name_until_deleted(self, db):
        breaker = create_breaker(db, BreakerIn(name="B-01", zone="Zone B", location="Building 2"))
        assert list_history(db)[0]["breaker_name"] == "B-01"

        delete_breaker(db, breaker.id)
        entries = list_history(db)
        assert len(entries) == 2
        assert all(e["breaker_name"] is None and e["breaker_id"] is None for e in entries)

    def test_never_shrinks_after_mutation(self, db):
        before = len(list_history(db))
        breaker = create_breaker(db, BreakerIn(name="B-01", zone="Zone B", location="Building 2"))
        after_create = len(list_history(db))
        delete_breaker(db, breaker.id)
        assert before < after_create < len(list_history(db))


def test_add_history_direct(db):
    entry = add_history(db, HistoryIn(action="Shift handover", details="  "), user_mode="Editor")
    assert entry.details is None
    assert list_history(db)[0]["action"] == "Shift handover"


def test_clear_history(db):
    record_action(db, "one")
    record_action(db, "two")
    assert clear_history(db) == 2
    assert list_history(db) == []
