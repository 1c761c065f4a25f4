"""
Zone / stats aggregator (read-only).
Lock usage figures are derived from breaker rows, never from locks.used, so the
dashboard numbers always agree with the breakers even when the lock table drifts.
"""

from sqlalchemy import func
from sqlalchemy.orm import Session
from loto.models.breaker import Breaker, STATE_ON, STATE_CLOSED
from loto.models.lock import Lock
from loto.models.personnel import Personnel
from loto.services.lock_reconciliation import holds_lock


def stats_from_breakers(db: Session) -> dict:
    breakers = db.query(Breaker).all()
    return {
        "total_breakers": len(breakers),
        "breakers_on": sum(1 for b in breakers if b.state == STATE_ON),
        "locked_breakers": sum(1 for b in breakers if b.state == STATE_CLOSED),
        "total_locks": db.query(func.count(Lock.id)).scalar() or 0,
        "used_locks": sum(1 for b in breakers if holds_lock(b)),
        "total_personnel": db.query(func.count(Personnel.id)).scalar() or 0,
    }


def locks_by_zone(db: Session) -> list[dict]:
    """Closed breakers with a key, grouped by zone (sorted); empty zones omitted."""
    groups = {}
    locked = (
        db.query(Breaker)
        .filter(Breaker.state == STATE_CLOSED)
        .order_by(Breaker.zone, Breaker.location, Breaker.name)
        .all()
    )
    for breaker in locked:
        if not holds_lock(breaker):
            continue
        zone = breaker.zone or "Unknown"
        group = groups.setdefault(zone, {"zone": zone, "locks_in_use": 0, "breakers": []})
        group["locks_in_use"] += 1
        group["breakers"].append({
            "name": breaker.name,
            "location": breaker.location,
            "lock_key": breaker.lock_key,
        })
    return [groups[zone] for zone in sorted(groups)]


def list_zones(db: Session) -> list[str]:
    rows = db.query(Breaker.zone).distinct().all()
    return sorted(zone for (zone,) in rows if zone)


def list_locations(db: Session, zone: str = None) -> list[str]:
    q = db.query(Breaker.location).distinct()
    if zone:
        q = q.filter(Breaker.zone == zone)
    return sorted(location for (location,) in q.all() if location)
