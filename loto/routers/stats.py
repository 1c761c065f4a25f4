"""Dashboard figures, always derived from current breaker rows."""

from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from loto.database import get_db
from loto.schemas.stats import StatsOut, ZoneGroupOut
from loto.services import stats_service

router = APIRouter()


@router.get("/stats", response_model=StatsOut, summary="Global counts")
def get_stats(db: Session = Depends(get_db)):
    return stats_service.stats_from_breakers(db)


@router.get("/stats/locks-by-zone", response_model=list[ZoneGroupOut], summary="Locks in use per zone")
def get_locks_by_zone(db: Session = Depends(get_db)):
    return stats_service.locks_by_zone(db)


@router.get("/zones", response_model=list[str])
def get_zones(db: Session = Depends(get_db)):
    return stats_service.list_zones(db)


@router.get("/locations", response_model=list[str])
def get_locations(zone: Optional[str] = None, db: Session = Depends(get_db)):
    return stats_service.list_locations(db, zone)
