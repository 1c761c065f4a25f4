from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class PersonnelIn(BaseModel):
    name: str
    lastname: str
    id_card: str
    company: Optional[str] = None
    habilitation: Optional[str] = None
    pdf_path: Optional[str] = None


class PersonnelOut(BaseModel):
    id: int
    name: str
    lastname: str
    id_card: str
    company: Optional[str]
    habilitation: Optional[str]
    pdf_path: Optional[str]
    created_at: Optional[datetime]

    class Config:
        from_attributes = True
