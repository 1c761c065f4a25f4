"""Breaker endpoints: reads for everyone, mutations (with lock reconciliation) for Editors."""

from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from loto.database import get_db
from loto.schemas.breaker import BreakerIn, BreakerOut, BreakerState
from loto.services import lock_reconciliation
from loto.services.breaker_cascade import update_breaker_cascading
from loto.utils.access import require_editor

router = APIRouter()


@router.get("/breakers", response_model=list[BreakerOut], summary="List breakers")
def list_breakers(zone: Optional[str] = None, location: Optional[str] = None,
                  state: Optional[BreakerState] = None, db: Session = Depends(get_db)):
    """Filter by zone, location and/or state. Ordered by zone, location, name."""
    return lock_reconciliation.get_breakers(db, zone=zone, location=location, state=state)


@router.get("/breakers/locked", response_model=list[BreakerOut], summary="Breakers in the Closed state")
def list_locked_breakers(db: Session = Depends(get_db)):
    return lock_reconciliation.get_locked_breakers(db)


@router.get("/breakers/{breaker_id}", response_model=BreakerOut)
def get_breaker(breaker_id: int, db: Session = Depends(get_db)):
    return lock_reconciliation.get_breaker(db, breaker_id)


@router.post("/breakers", summary="Add a breaker")
def add_breaker(body: BreakerIn, db: Session = Depends(get_db), user_mode: str = Depends(require_editor)):
    breaker = lock_reconciliation.create_breaker(db, body, user_mode)
    return {"success": True, "id": breaker.id}


@router.put("/breakers/{breaker_id}", summary="Update a breaker")
def update_breaker(breaker_id: int, body: BreakerIn, db: Session = Depends(get_db),
                   user_mode: str = Depends(require_editor)):
    lock_reconciliation.update_breaker(db, breaker_id, body, user_mode)
    return {"success": True}


@router.put("/breakers/{breaker_id}/cascade", summary="Update a breaker and its direct children")
def update_breaker_with_children(breaker_id: int, body: BreakerIn, db: Session = Depends(get_db),
                                 user_mode: str = Depends(require_editor)):
    """
    Off / Closed propagate one level to breakers whose general_breaker is this breaker.
    On never propagates.
    """
    children = update_breaker_cascading(db, breaker_id, body, user_mode)
    return {"success": True, "children_updated": children}


@router.delete("/breakers/{breaker_id}", summary="Delete a breaker (releases its lock)")
def delete_breaker(breaker_id: int, db: Session = Depends(get_db), user_mode: str = Depends(require_editor)):
    lock_reconciliation.delete_breaker(db, breaker_id, user_mode)
    return {"success": True}
