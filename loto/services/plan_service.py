"""Electrical plan metadata. The documents themselves are kept by the file store."""

from datetime import datetime
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from loto.exceptions import NotFoundError
from loto.models.plan import Plan
from loto.schemas.plan import PlanIn
from loto.services.history_service import record_action
from loto.services.lock_reconciliation import clean_text
from loto.utils.write_lock import serialized


def get_plans(db: Session) -> list[Plan]:
    return db.query(Plan).order_by(Plan.uploaded_at.desc(), Plan.id.desc()).all()


@serialized
def create_plan(db: Session, data: PlanIn, user_mode: str = "Editor") -> Plan:
    version = clean_text(data.version)
    plan = Plan(filename=data.filename.strip(), file_path=data.file_path.strip(),
                version=version, uploaded_at=datetime.utcnow())
    try:
        db.add(plan)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    filename = data.filename.strip()
    record_action(db, f"Electrical plan {version or filename} uploaded",
                  f"File: {filename}" if version else None, None, user_mode)
    return plan


@serialized
def delete_plan(db: Session, plan_id: int, user_mode: str = "Editor") -> None:
    plan = db.query(Plan).filter(Plan.id == plan_id).first()
    if not plan:
        raise NotFoundError("Plan", plan_id)
    filename = plan.filename
    try:
        db.delete(plan)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    record_action(db, f"Deleted electrical plan {filename}", None, None, user_mode)
