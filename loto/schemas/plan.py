from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class PlanIn(BaseModel):
    filename: str
    file_path: str
    version: Optional[str] = None


class PlanOut(BaseModel):
    id: int
    filename: str
    file_path: str
    version: Optional[str]
    uploaded_at: Optional[datetime]

    class Config:
        from_attributes = True
