"""
Lock inventory CRUD (direct edits by an Editor).
Direct edits write the same used / assigned_to fields as breaker reconciliation;
both paths run under the shared write lock, and resync_locks() restores the
breaker-derived truth if a manual edit contradicts it.
"""

from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from loto.exceptions import NotFoundError
from loto.models.lock import Lock
from loto.schemas.lock import LockIn
from loto.services.history_service import record_action
from loto.services.lock_reconciliation import clean_text
from loto.utils.logger import get_logger
from loto.utils.write_lock import serialized

logger = get_logger(__name__)


def get_locks(db: Session, zone: str = None, used: Optional[bool] = None) -> list[Lock]:
    q = db.query(Lock)
    if zone:
        q = q.filter(Lock.zone == zone)
    if used is not None:
        q = q.filter(Lock.used == (1 if used else 0))
    return q.order_by(Lock.zone, Lock.key_number).all()


def get_lock(db: Session, lock_id: int) -> Lock:
    lock = db.query(Lock).filter(Lock.id == lock_id).first()
    if not lock:
        raise NotFoundError("Lock", lock_id)
    return lock


def _apply(lock: Lock, data: LockIn):
    lock.key_number = data.key_number.strip()
    lock.zone = data.zone.strip()
    lock.used = 1 if data.used else 0
    lock.assigned_to = clean_text(data.assigned_to) if data.used else None
    lock.remarks = clean_text(data.remarks)


@serialized
def create_lock(db: Session, data: LockIn, user_mode: str = "Editor") -> Lock:
    lock = Lock()
    _apply(lock, data)
    try:
        db.add(lock)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    key_number, zone = lock.key_number, lock.zone
    logger.info(f"[LOCK] Added {key_number} ({zone})")
    record_action(db, f"Added lock {key_number}",
                  f"Zone: {zone}, Status: {'In use' if data.used else 'Available'}", None, user_mode)
    return lock


@serialized
def update_lock(db: Session, lock_id: int, data: LockIn, user_mode: str = "Editor") -> Lock:
    lock = get_lock(db, lock_id)
    try:
        _apply(lock, data)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    key_number = data.key_number.strip()
    action = f"Lock {key_number} marked as in use" if data.used else f"Lock {key_number} released"
    record_action(db, action, f"Zone: {data.zone.strip()}", None, user_mode)
    return lock


@serialized
def delete_lock(db: Session, lock_id: int, user_mode: str = "Editor") -> None:
    lock = get_lock(db, lock_id)
    key_number = lock.key_number
    try:
        db.delete(lock)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    logger.info(f"[LOCK] Deleted {key_number}")
    record_action(db, f"Deleted lock {key_number}", None, None, user_mode)
