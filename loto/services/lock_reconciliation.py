"""
Lock reconciliation engine.

Keeps the lock inventory consistent with breaker state:
  a lock is in use (used=1, assigned_to=<breaker name>) iff a Closed breaker
  references its key_number.

Every breaker mutation reads the current row first, writes the breaker, then
issues the compensating lock writes against the pre-update snapshot, and finally
appends a history entry. The breaker write and its lock compensation commit
together; the history entry commits on its own (see history_service).
resync_locks() rebuilds lock usage from breaker data alone and repairs any drift
(direct lock edits, bulk imports, crashes between steps).
"""

from datetime import datetime
from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from loto.exceptions import NotFoundError
from loto.models.breaker import Breaker, STATE_CLOSED, STATE_ON
from loto.models.history_entry import HistoryEntry
from loto.models.lock import Lock
from loto.schemas.breaker import BreakerIn
from loto.services.history_service import record_action
from loto.utils.logger import get_logger
from loto.utils.write_lock import serialized

logger = get_logger(__name__)


def clean_text(value: Optional[str]) -> Optional[str]:
    """Blank optional text is stored as NULL."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def holds_lock(breaker) -> bool:
    """True when the breaker is Closed with a non-empty lock_key."""
    return breaker.state == STATE_CLOSED and bool((breaker.lock_key or "").strip())


# ── Reads ─────────────────────────────────────────────────────────────────────

def get_breakers(db: Session, zone: str = None, location: str = None, state: str = None) -> list[Breaker]:
    q = db.query(Breaker)
    if zone:
        q = q.filter(Breaker.zone == zone)
    if location:
        q = q.filter(Breaker.location == location)
    if state:
        q = q.filter(Breaker.state == state)
    return q.order_by(Breaker.zone, Breaker.location, Breaker.name).all()


def get_locked_breakers(db: Session) -> list[Breaker]:
    return get_breakers(db, state=STATE_CLOSED)


def get_breaker(db: Session, breaker_id: int) -> Breaker:
    breaker = db.query(Breaker).filter(Breaker.id == breaker_id).first()
    if not breaker:
        raise NotFoundError("Breaker", breaker_id)
    return breaker


# ── Lock usage primitive ──────────────────────────────────────────────────────

def set_lock_usage_by_key(db: Session, key_number: str, used: bool,
                          assigned_to: Optional[str] = None) -> Optional[Lock]:
    """
    Mark the lock with this key in use by `assigned_to`, or release it.
    An unknown key is not an error: the breaker keeps the key string and the
    lock row is picked up by resync_locks() once it exists. Does not commit.
    """
    if not key_number:
        return None
    lock = db.query(Lock).filter(Lock.key_number == key_number).first()
    if not lock:
        logger.warning(f"[LOCK] Key {key_number} not found in lock inventory, left unresolved")
        return None

    if used:
        if lock.used and lock.assigned_to and lock.assigned_to != assigned_to:
            # Two Closed breakers on one key: last write wins
            logger.warning(f"[LOCK] Key {key_number} reassigned from {lock.assigned_to} to {assigned_to}")
        lock.used = 1
        lock.assigned_to = assigned_to
        logger.info(f"[LOCK] 🔒 {key_number} in use by {assigned_to}")
    else:
        lock.used = 0
        lock.assigned_to = None
        logger.info(f"[LOCK] 🔓 {key_number} released")
    return lock


def _repoint_children(db: Session, breaker_id: int, old_name: str, new_name: str) -> int:
    """Follow a parent rename so children keep pointing at it by name."""
    namesakes = db.query(Breaker).filter(Breaker.name == old_name, Breaker.id != breaker_id).count()
    if namesakes:
        # Another breaker still answers to the old name; its children stay with it
        return 0
    return (
        db.query(Breaker)
        .filter(Breaker.general_breaker == old_name, Breaker.id != breaker_id)
        .update({Breaker.general_breaker: new_name}, synchronize_session=False)
    )


def _state_action(name: str, state: str) -> str:
    if state == STATE_CLOSED:
        return f"Breaker {name} locked"
    if state == STATE_ON:
        return f"Breaker {name} set on"
    return f"Breaker {name} set off"


# ── Breaker mutations ─────────────────────────────────────────────────────────

@serialized
def create_breaker(db: Session, data: BreakerIn, user_mode: str = "Editor") -> Breaker:
    breaker = Breaker(
        name=data.name.strip(),
        zone=data.zone.strip(),
        location=data.location.strip(),
        state=data.state or "Off",
        lock_key=clean_text(data.lock_key),
        general_breaker=clean_text(data.general_breaker),
        last_updated=datetime.utcnow(),
    )
    try:
        db.add(breaker)
        db.flush()
        if holds_lock(breaker):
            set_lock_usage_by_key(db, breaker.lock_key, True, breaker.name)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    breaker_id = breaker.id
    logger.info(f"[BREAKER] Added {breaker.name} ({breaker.zone} / {breaker.location}) state={breaker.state}")
    record_action(db, f"Added breaker {breaker.name}",
                  f"Zone: {breaker.zone}, Location: {breaker.location}, State: {breaker.state}",
                  breaker_id, user_mode)
    return breaker


@serialized
def update_breaker(db: Session, breaker_id: int, data: BreakerIn, user_mode: str = "Editor") -> Breaker:
    """
    Full update of one breaker plus lock compensation.
    The release decision is taken against the row as it was before this call.
    """
    breaker = get_breaker(db, breaker_id)
    old_name, old_state, old_key = breaker.name, breaker.state, breaker.lock_key

    new_name = data.name.strip()
    new_key = clean_text(data.lock_key)
    old_in_use = bool(old_key) and old_state == STATE_CLOSED
    new_in_use = bool(new_key) and data.state == STATE_CLOSED

    try:
        breaker.name = new_name
        breaker.zone = data.zone.strip()
        breaker.location = data.location.strip()
        breaker.state = data.state
        breaker.lock_key = new_key
        breaker.general_breaker = clean_text(data.general_breaker)
        breaker.last_updated = datetime.utcnow()
        if new_name != old_name:
            moved = _repoint_children(db, breaker_id, old_name, new_name)
            if moved:
                logger.info(f"[BREAKER] {moved} children re-pointed from {old_name} to {new_name}")
        db.flush()

        if old_key and (old_key != new_key or (old_in_use and not new_in_use)):
            set_lock_usage_by_key(db, old_key, False)
        if new_in_use:
            set_lock_usage_by_key(db, new_key, True, new_name)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    record_action(db, _state_action(new_name, data.state),
                  f"({data.zone.strip()} - {data.location.strip()})", breaker_id, user_mode)
    return breaker


@serialized
def delete_breaker(db: Session, breaker_id: int, user_mode: str = "Editor") -> None:
    """Release the held lock (if Closed) before the row goes; history rows keep a null breaker_id."""
    breaker = get_breaker(db, breaker_id)
    name = breaker.name
    try:
        if holds_lock(breaker):
            set_lock_usage_by_key(db, breaker.lock_key, False)
            db.flush()
        db.query(HistoryEntry).filter(HistoryEntry.breaker_id == breaker_id).update(
            {HistoryEntry.breaker_id: None}, synchronize_session=False)
        db.delete(breaker)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    logger.info(f"[BREAKER] Deleted {name}")
    record_action(db, f"Deleted breaker {name}", None, None, user_mode)


# ── Full repair ───────────────────────────────────────────────────────────────

@serialized
def resync_locks(db: Session, user_mode: str = "Editor") -> int:
    """
    Rebuild locks.used / assigned_to from breaker state alone.
    Idempotent: the end state depends only on the breakers table.
    Returns the number of locks marked in use.
    """
    try:
        locks = db.query(Lock).all()
        breakers = db.query(Breaker).order_by(Breaker.id).all()
        logger.info(f"[RESYNC] Starting: {len(locks)} locks, {len(breakers)} breakers")

        by_key = {}
        for lock in locks:
            lock.used = 0
            lock.assigned_to = None
            by_key[lock.key_number] = lock

        updated = 0
        for breaker in breakers:
            if not holds_lock(breaker):
                continue
            lock = by_key.get(breaker.lock_key.strip())
            if not lock:
                logger.warning(f"[RESYNC] Breaker {breaker.name} references missing lock {breaker.lock_key}")
                continue
            if lock.used:
                logger.warning(f"[RESYNC] Key {lock.key_number} claimed by both "
                               f"{lock.assigned_to} and {breaker.name}")
            else:
                updated += 1
            lock.used = 1
            lock.assigned_to = breaker.name
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    logger.info(f"[RESYNC] Complete: {updated} locks in use")
    record_action(db, "Lock usage resynchronized", f"{updated} locks in use", None, user_mode)
    return updated
