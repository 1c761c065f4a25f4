from pydantic import BaseModel
from datetime import datetime
from typing import Literal, Optional

UserMode = Literal["Editor", "Visitor"]


class HistoryIn(BaseModel):
    action: str
    details: Optional[str] = None
    breaker_id: Optional[int] = None


class HistoryEntryOut(BaseModel):
    id: int
    breaker_id: Optional[int]
    breaker_name: Optional[str] = None   # null once the breaker is deleted
    action: str
    user_mode: UserMode
    details: Optional[str]
    timestamp: datetime

    class Config:
        from_attributes = True
