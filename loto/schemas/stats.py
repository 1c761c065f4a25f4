from pydantic import BaseModel


class StatsOut(BaseModel):
    total_breakers: int
    breakers_on: int
    locked_breakers: int
    total_locks: int
    used_locks: int          # derived from Closed breakers, not from locks.used
    total_personnel: int


class LockedBreakerOut(BaseModel):
    name: str
    location: str
    lock_key: str


class ZoneGroupOut(BaseModel):
    zone: str
    locks_in_use: int
    breakers: list[LockedBreakerOut]
