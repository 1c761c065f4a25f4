"""Personnel CRUD. Independent of the lock subsystem; every change is audited."""

from datetime import datetime
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from loto.exceptions import NotFoundError
from loto.models.personnel import Personnel
from loto.schemas.personnel import PersonnelIn
from loto.services.history_service import record_action
from loto.services.lock_reconciliation import clean_text
from loto.utils.write_lock import serialized


def get_personnel(db: Session) -> list[Personnel]:
    return db.query(Personnel).order_by(Personnel.lastname, Personnel.name).all()


def get_person(db: Session, person_id: int) -> Personnel:
    person = db.query(Personnel).filter(Personnel.id == person_id).first()
    if not person:
        raise NotFoundError("Personnel", person_id)
    return person


def _apply(person: Personnel, data: PersonnelIn):
    person.name = data.name.strip()
    person.lastname = data.lastname.strip()
    person.id_card = data.id_card.strip()
    person.company = clean_text(data.company)
    person.habilitation = clean_text(data.habilitation)
    person.pdf_path = clean_text(data.pdf_path)


@serialized
def create_personnel(db: Session, data: PersonnelIn, user_mode: str = "Editor") -> Personnel:
    person = Personnel(created_at=datetime.utcnow())
    _apply(person, data)
    try:
        db.add(person)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    record_action(db, f"Personnel {data.name.strip()} {data.lastname.strip()} added",
                  f"(Habilitation: {clean_text(data.habilitation) or 'N/A'})", None, user_mode)
    return person


@serialized
def update_personnel(db: Session, person_id: int, data: PersonnelIn, user_mode: str = "Editor") -> Personnel:
    person = get_person(db, person_id)
    try:
        _apply(person, data)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    record_action(db, f"Updated personnel {data.name.strip()} {data.lastname.strip()}",
                  f"ID: {data.id_card.strip()}", None, user_mode)
    return person


@serialized
def delete_personnel(db: Session, person_id: int, user_mode: str = "Editor") -> None:
    person = get_person(db, person_id)
    full_name = f"{person.name} {person.lastname}"
    try:
        db.delete(person)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    record_action(db, f"Deleted personnel {full_name}", None, None, user_mode)
