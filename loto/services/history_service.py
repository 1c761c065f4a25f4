"""
History / audit logger.
Every mutation in the other services ends with record_action(). The audit write is
fire-and-forget: the primary change is already committed, and a failing history
insert is rolled back and logged, never raised.
"""

from datetime import datetime
from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from loto.models.breaker import Breaker
from loto.models.history_entry import HistoryEntry
from loto.schemas.history import HistoryIn
from loto.utils.logger import get_logger
from loto.utils.write_lock import serialized

logger = get_logger(__name__)


def record_action(db: Session, action: str, details: Optional[str] = None,
                  breaker_id: Optional[int] = None, user_mode: str = "Editor") -> Optional[HistoryEntry]:
    """Append one history row. Returns it, or None if the store rejected the write."""
    entry = HistoryEntry(breaker_id=breaker_id, action=action, user_mode=user_mode,
                         details=details, timestamp=datetime.utcnow())
    try:
        db.add(entry)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"[AUDIT] Failed to record '{action}': {e}")
        return None
    logger.debug(f"[AUDIT][{user_mode}] {action}" + (f" {details}" if details else ""))
    return entry


@serialized
def add_history(db: Session, body: HistoryIn, user_mode: str = "Editor") -> Optional[HistoryEntry]:
    details = (body.details or "").strip() or None
    return record_action(db, body.action.strip(), details, body.breaker_id, user_mode)


def list_history(db: Session, limit: Optional[int] = None) -> list[dict]:
    """
    Newest-first audit log with the breaker name joined in (None once deleted).
    limit omitted or <= 0 returns the whole log.
    """
    q = (
        db.query(HistoryEntry, Breaker.name)
        .outerjoin(Breaker, HistoryEntry.breaker_id == Breaker.id)
        .order_by(HistoryEntry.timestamp.desc(), HistoryEntry.id.desc())
    )
    if limit and limit > 0:
        q = q.limit(limit)
    return [
        {
            "id": entry.id,
            "breaker_id": entry.breaker_id,
            "breaker_name": breaker_name,
            "action": entry.action,
            "user_mode": entry.user_mode,
            "details": entry.details,
            "timestamp": entry.timestamp,
        }
        for entry, breaker_name in q.all()
    ]


@serialized
def clear_history(db: Session) -> int:
    """Delete the whole audit log. The only path that removes history rows."""
    try:
        removed = db.query(HistoryEntry).delete(synchronize_session=False)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    logger.warning(f"[AUDIT] History cleared ({removed} entries)")
    return removed
