"""Lock inventory endpoints + full lock/breaker resync."""

from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from loto.database import get_db
from loto.schemas.lock import LockIn, LockOut
from loto.services import lock_service
from loto.services.lock_reconciliation import resync_locks
from loto.utils.access import require_editor

router = APIRouter()


@router.get("/locks", response_model=list[LockOut], summary="List locks")
def list_locks(zone: Optional[str] = None, used: Optional[bool] = None, db: Session = Depends(get_db)):
    return lock_service.get_locks(db, zone=zone, used=used)


@router.post("/locks", summary="Add a lock")
def add_lock(body: LockIn, db: Session = Depends(get_db), user_mode: str = Depends(require_editor)):
    lock = lock_service.create_lock(db, body, user_mode)
    return {"success": True, "id": lock.id}


@router.post("/locks/resync", summary="Rebuild lock usage from breaker state")
def resync(db: Session = Depends(get_db), user_mode: str = Depends(require_editor)):
    """Repairs drift between the lock table and Closed breakers. Safe to run repeatedly."""
    return {"success": True, "updated_count": resync_locks(db, user_mode)}


@router.put("/locks/{lock_id}", summary="Update a lock")
def update_lock(lock_id: int, body: LockIn, db: Session = Depends(get_db),
                user_mode: str = Depends(require_editor)):
    lock_service.update_lock(db, lock_id, body, user_mode)
    return {"success": True}


@router.delete("/locks/{lock_id}", summary="Delete a lock")
def delete_lock(lock_id: int, db: Session = Depends(get_db), user_mode: str = Depends(require_editor)):
    lock_service.delete_lock(db, lock_id, user_mode)
    return {"success": True}
