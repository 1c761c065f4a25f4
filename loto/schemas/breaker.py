from pydantic import BaseModel
from datetime import datetime
from typing import Literal, Optional

BreakerState = Literal["On", "Off", "Closed"]


class BreakerIn(BaseModel):
    """Full breaker record as sent by the editor form (create and update)."""
    name: str
    zone: str
    location: str
    state: BreakerState = "Off"
    lock_key: Optional[str] = None
    general_breaker: Optional[str] = None


class BreakerOut(BaseModel):
    id: int
    name: str
    zone: str
    location: str
    state: BreakerState
    lock_key: Optional[str]
    general_breaker: Optional[str]
    last_updated: Optional[datetime]

    class Config:
        from_attributes = True
