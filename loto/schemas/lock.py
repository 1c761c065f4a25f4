from pydantic import BaseModel
from typing import Optional


class LockIn(BaseModel):
    key_number: str
    zone: str
    used: bool = False
    assigned_to: Optional[str] = None
    remarks: Optional[str] = None


class LockOut(BaseModel):
    id: int
    key_number: str
    zone: str
    used: bool
    assigned_to: Optional[str]
    remarks: Optional[str]

    class Config:
        from_attributes = True
