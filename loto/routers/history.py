"""Audit trail endpoints."""

from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from loto.config import settings
from loto.database import get_db
from loto.schemas.history import HistoryIn, HistoryEntryOut
from loto.services import history_service
from loto.utils.access import require_editor

router = APIRouter()


@router.get("/history", response_model=list[HistoryEntryOut], summary="Audit log, newest first")
def list_history(limit: Optional[int] = None, db: Session = Depends(get_db)):
    """limit defaults to DEFAULT_HISTORY_LIMIT; pass limit=0 for the full log."""
    if limit is None:
        limit = settings.DEFAULT_HISTORY_LIMIT
    return history_service.list_history(db, limit)


@router.post("/history", summary="Append a history entry")
def add_history(body: HistoryIn, db: Session = Depends(get_db), user_mode: str = Depends(require_editor)):
    entry = history_service.add_history(db, body, user_mode)
    if entry is None:
        return {"success": False, "error": "History entry could not be recorded"}
    return {"success": True, "id": entry.id}


@router.delete("/history", summary="Clear the whole audit log")
def clear_history(db: Session = Depends(get_db), user_mode: str = Depends(require_editor)):
    return {"success": True, "removed": history_service.clear_history(db)}
