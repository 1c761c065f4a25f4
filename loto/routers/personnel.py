"""Personnel (habilitation) register."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from loto.database import get_db
from loto.schemas.personnel import PersonnelIn, PersonnelOut
from loto.services import personnel_service
from loto.utils.access import require_editor

router = APIRouter()


@router.get("/personnel", response_model=list[PersonnelOut])
def list_personnel(db: Session = Depends(get_db)):
    return personnel_service.get_personnel(db)


@router.post("/personnel")
def add_personnel(body: PersonnelIn, db: Session = Depends(get_db), user_mode: str = Depends(require_editor)):
    person = personnel_service.create_personnel(db, body, user_mode)
    return {"success": True, "id": person.id}


@router.put("/personnel/{person_id}")
def update_personnel(person_id: int, body: PersonnelIn, db: Session = Depends(get_db),
                     user_mode: str = Depends(require_editor)):
    personnel_service.update_personnel(db, person_id, body, user_mode)
    return {"success": True}


@router.delete("/personnel/{person_id}")
def delete_personnel(person_id: int, db: Session = Depends(get_db), user_mode: str = Depends(require_editor)):
    personnel_service.delete_personnel(db, person_id, user_mode)
    return {"success": True}
