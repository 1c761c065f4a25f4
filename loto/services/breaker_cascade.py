"""
Breaker cascade controller.
Switching a general breaker Off or locking it (Closed) pushes the same state to the
breakers that name it as their general_breaker. One level only: grandchildren are
left alone. Switching a parent On never re-energises its children.
"""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from loto.exceptions import NotFoundError
from loto.models.breaker import Breaker, STATE_OFF, STATE_CLOSED
from loto.schemas.breaker import BreakerIn
from loto.services.lock_reconciliation import update_breaker
from loto.utils.logger import get_logger
from loto.utils.write_lock import serialized

logger = get_logger(__name__)

CASCADING_STATES = {STATE_OFF, STATE_CLOSED}


@serialized
def update_breaker_cascading(db: Session, breaker_id: int, data: BreakerIn, user_mode: str = "Editor") -> int:
    """
    Update the breaker, then each direct child through the same update path
    (lock release/claim + history). Children are best-effort: a failing child is
    logged and skipped, earlier updates stay committed. Returns children updated.
    """
    parent = update_breaker(db, breaker_id, data, user_mode)
    if data.state not in CASCADING_STATES:
        return 0

    parent_name = parent.name
    children = (
        db.query(Breaker)
        .filter(Breaker.general_breaker == parent_name, Breaker.id != breaker_id)
        .order_by(Breaker.id)
        .all()
    )
    # Snapshot before any child update commits and expires the rows
    payloads = [
        (child.id, child.name, BreakerIn(
            name=child.name,
            zone=child.zone,
            location=child.location,
            state=data.state,
            lock_key=child.lock_key,
            general_breaker=child.general_breaker,
        ))
        for child in children
    ]

    updated = 0
    for child_id, child_name, payload in payloads:
        try:
            update_breaker(db, child_id, payload, user_mode)
            updated += 1
        except (SQLAlchemyError, NotFoundError) as e:
            logger.error(f"[CASCADE] Child {child_name} of {parent_name} not updated: {e}")

    logger.info(f"[CASCADE] {parent_name} → {data.state}: {updated}/{len(payloads)} children updated")
    return updated
