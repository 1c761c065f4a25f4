"""Electrical plan metadata endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from loto.database import get_db
from loto.schemas.plan import PlanIn, PlanOut
from loto.services import plan_service
from loto.utils.access import require_editor

router = APIRouter()


@router.get("/plans", response_model=list[PlanOut], summary="Plans, newest upload first")
def list_plans(db: Session = Depends(get_db)):
    return plan_service.get_plans(db)


@router.post("/plans")
def add_plan(body: PlanIn, db: Session = Depends(get_db), user_mode: str = Depends(require_editor)):
    plan = plan_service.create_plan(db, body, user_mode)
    return {"success": True, "id": plan.id}


@router.delete("/plans/{plan_id}")
def delete_plan(plan_id: int, db: Session = Depends(get_db), user_mode: str = Depends(require_editor)):
    plan_service.delete_plan(db, plan_id, user_mode)
    return {"success": True}
