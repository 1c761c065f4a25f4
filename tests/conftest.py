"""Shared fixtures: a fresh in-memory SQLite store per test."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from loto.database import create_tables, enable_sqlite_foreign_keys
from loto.models.breaker import Breaker
from loto.models.lock import Lock


@pytest.fixture
def engine():
    eng = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    enable_sqlite_foreign_keys(eng)
    create_tables(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def make_lock(db):
    """Insert a lock row directly (no audit, no reconciliation)."""
    def _make(key_number, zone="Zone A", used=0, assigned_to=None):
        lock = Lock(key_number=key_number, zone=zone, used=used, assigned_to=assigned_to)
        db.add(lock)
        db.commit()
        return lock
    return _make


@pytest.fixture
def make_breaker(db):
    """Insert a breaker row directly, bypassing lock reconciliation (used to seed drift)."""
    def _make(name, zone="Zone A", location="Building 1", state="Off", lock_key=None, general_breaker=None):
        breaker = Breaker(name=name, zone=zone, location=location, state=state,
                          lock_key=lock_key, general_breaker=general_breaker)
        db.add(breaker)
        db.commit()
        return breaker
    return _make


@pytest.fixture
def lock_state(db):
    """(used, assigned_to) of a lock as currently stored."""
    def _state(key_number):
        db.expire_all()
        lock = db.query(Lock).filter(Lock.key_number == key_number).one()
        return lock.used, lock.assigned_to
    return _state
