"""Unit tests for the lock reconciliation engine."""

import pytest
from loto.exceptions import NotFoundError
from loto.models.breaker import Breaker
from loto.models.history_entry import HistoryEntry
from loto.models.lock import Lock
from loto.schemas.breaker import BreakerIn
from loto.services.lock_reconciliation import (
    create_breaker, update_breaker, delete_breaker, resync_locks, get_breakers,
)


def make_data(name="Breaker A-1-01", state="Closed", lock_key="K001", zone="Zone A",
              location="Building 1", general_breaker=None):
    return BreakerIn(name=name, zone=zone, location=location, state=state,
                     lock_key=lock_key, general_breaker=general_breaker)


class TestCreateBreaker:
    def test_closed_breaker_claims_lock(self, db, make_lock, lock_state):
        make_lock("K001")
        create_breaker(db, make_data())
        assert lock_state("K001") == (1, "Breaker A-1-01")

    def test_open_breaker_does_not_claim_lock(self, db, make_lock, lock_state):
        make_lock("K001")
        create_breaker(db, make_data(state="Off"))
        assert lock_state("K001") == (0, None)

    def test_unknown_key_is_tolerated(self, db):
        breaker = create_breaker(db, make_data(lock_key="K999"))
        assert breaker.lock_key == "K999"
        assert db.query(Lock).count() == 0

    def test_blank_key_stored_as_null(self, db):
        breaker = create_breaker(db, make_data(lock_key="   "))
        assert breaker.lock_key is None

    def test_writes_history_entry(self, db):
        breaker = create_breaker(db, make_data(), user_mode="Editor")
        entry = db.query(HistoryEntry).one()
        assert entry.action == "Added breaker Breaker A-1-01"
        assert entry.details == "Zone: Zone A, Location: Building 1, State: Closed"
        assert entry.breaker_id == breaker.id
        assert entry.user_mode == "Editor"

    def test_audit_failure_does_not_undo_breaker(self, db):
        # "Admin" violates the history user_mode CHECK; the breaker must still be saved
        create_breaker(db, make_data(state="Off"), user_mode="Admin")
        assert db.query(Breaker).count() == 1
        assert db.query(HistoryEntry).count() == 0


class TestUpdateBreaker:
    def test_closed_to_off_releases_lock(self, db, make_lock, lock_state):
        make_lock("K001")
        breaker = create_breaker(db, make_data())
        update_breaker(db, breaker.id, make_data(state="Off"))
        assert lock_state("K001") == (0, None)

    def test_key_change_releases_old_and_claims_new(self, db, make_lock, lock_state):
        make_lock("K001")
        make_lock("K002")
        breaker = create_breaker(db, make_data())
        update_breaker(db, breaker.id, make_data(lock_key="K002"))
        assert lock_state("K001") == (0, None)
        assert lock_state("K002") == (1, "Breaker A-1-01")

    def test_off_to_closed_claims_lock(self, db, make_lock, lock_state):
        make_lock("K001")
        breaker = create_breaker(db, make_data(state="Off"))
        update_breaker(db, breaker.id, make_data(state="Closed"))
        assert lock_state("K001") == (1, "Breaker A-1-01")

    def test_removing_key_releases_lock(self, db, make_lock, lock_state):
        make_lock("K001")
        breaker = create_breaker(db, make_data())
        update_breaker(db, breaker.id, make_data(lock_key=None))
        assert lock_state("K001") == (0, None)

    def test_rename_while_locked_reassigns_lock(self, db, make_lock, lock_state):
        make_lock("K001")
        breaker = create_breaker(db, make_data())
        update_breaker(db, breaker.id, make_data(name="Breaker A-1-01 (new)"))
        assert lock_state("K001") == (1, "Breaker A-1-01 (new)")

    def test_rename_repoints_children(self, db, make_breaker):
        parent = make_breaker("Sub Panel A-1")
        child = make_breaker("Breaker A-1-02", general_breaker="Sub Panel A-1")
        update_breaker(db, parent.id, make_data(name="Sub Panel A-2", state="On", lock_key=None))
        db.expire_all()
        assert db.get(Breaker, child.id).general_breaker == "Sub Panel A-2"

    def test_rename_keeps_children_when_name_still_taken(self, db, make_breaker):
        parent = make_breaker("Panel X")
        make_breaker("Panel X", zone="Zone B")
        child = make_breaker("Child", general_breaker="Panel X")
        update_breaker(db, parent.id, make_data(name="Panel Y", state="On", lock_key=None))
        db.expire_all()
        assert db.get(Breaker, child.id).general_breaker == "Panel X"

    @pytest.mark.parametrize("state,action", [
        ("Closed", "Breaker B-01 locked"),
        ("On", "Breaker B-01 set on"),
        ("Off", "Breaker B-01 set off"),
    ])
    def test_history_text_follows_new_state(self, db, make_breaker, state, action):
        breaker = make_breaker("B-01")
        update_breaker(db, breaker.id, make_data(name="B-01", state=state, lock_key=None, zone="Zone B",
                                                 location="Building 2"))
        entry = db.query(HistoryEntry).one()
        assert entry.action == action
        assert entry.details == "(Zone B - Building 2)"
        assert entry.breaker_id == breaker.id

    def test_unknown_breaker_raises(self, db):
        with pytest.raises(NotFoundError):
            update_breaker(db, 42, make_data())

    def test_second_claim_overwrites_assignment(self, db, make_lock, lock_state):
        make_lock("K001")
        create_breaker(db, make_data(name="First"))
        create_breaker(db, make_data(name="Second"))
        assert lock_state("K001") == (1, "Second")


class TestDeleteBreaker:
    def test_delete_releases_lock(self, db, make_lock, lock_state):
        make_lock("K001")
        breaker = create_breaker(db, make_data())
        delete_breaker(db, breaker.id)
        assert lock_state("K001") == (0, None)
        assert db.query(Breaker).count() == 0

    def test_delete_open_breaker_leaves_lock_alone(self, db, make_lock, make_breaker, lock_state):
        make_lock("K001", used=1, assigned_to="Other breaker")
        breaker = make_breaker("Idle", state="Off", lock_key="K001")
        delete_breaker(db, breaker.id)
        assert lock_state("K001") == (1, "Other breaker")

    def test_delete_keeps_history_with_null_breaker(self, db):
        breaker = create_breaker(db, make_data(state="Off", lock_key=None))
        breaker_id = breaker.id
        update_breaker(db, breaker_id, make_data(state="On", lock_key=None))
        delete_breaker(db, breaker_id)

        db.expire_all()
        entries = db.query(HistoryEntry).order_by(HistoryEntry.id).all()
        assert len(entries) == 3
        assert all(e.breaker_id is None for e in entries)
        assert entries[-1].action == "Deleted breaker Breaker A-1-01"

    def test_unknown_breaker_raises(self, db):
        with pytest.raises(NotFoundError):
            delete_breaker(db, 7)


class TestResyncLocks:
    def test_restores_invariant_after_corruption(self, db, make_lock, make_breaker, lock_state):
        make_lock("K001", used=0)
        make_lock("K002", used=1, assigned_to="Ghost")
        make_lock("K005", used=1, assigned_to="Wrong name")
        make_breaker("Breaker A-1-01", state="Closed", lock_key="K001")
        make_breaker("Breaker B-01", zone="Zone B", state="Closed", lock_key="K005")
        make_breaker("Breaker A-1-02", state="Off", lock_key="K002")

        assert resync_locks(db) == 2
        assert lock_state("K001") == (1, "Breaker A-1-01")
        assert lock_state("K002") == (0, None)
        assert lock_state("K005") == (1, "Breaker B-01")

    def test_idempotent(self, db, make_lock, make_breaker):
        make_lock("K001")
        make_lock("K002", used=1, assigned_to="Ghost")
        make_breaker("Breaker A-1-01", state="Closed", lock_key="K001")
        make_breaker("Breaker X", state="Closed", lock_key="K404")

        def snapshot():
            db.expire_all()
            return [(l.key_number, l.used, l.assigned_to) for l in db.query(Lock).order_by(Lock.key_number)]

        first_count = resync_locks(db)
        first = snapshot()
        second_count = resync_locks(db)
        assert first_count == second_count == 1
        assert snapshot() == first


def test_get_breakers_filters_and_orders(db, make_breaker):
    make_breaker("B2", zone="Zone B", location="Building 2", state="On")
    make_breaker("A2", zone="Zone A", location="Building 1", state="Closed")
    make_breaker("A1", zone="Zone A", location="Building 1", state="Off")

    assert [b.name for b in get_breakers(db)] == ["A1", "A2", "B2"]
    assert [b.name for b in get_breakers(db, zone="Zone A", state="Closed")] == ["A2"]
    assert [b.name for b in get_breakers(db, location="Building 2")] == ["B2"]
