"""
Database connection, session management, and table creation.
Uses SQLAlchemy with SQLite (the desktop front-end runs against a local file).
All models are auto-imported here so create_tables() creates every table in one call.
"""

import os
from sqlalchemy import create_engine, event
from sqlalchemy.engine.url import make_url
from sqlalchemy.orm import declarative_base, sessionmaker
from loto.config import settings


def _engine_kwargs(url: str) -> dict:
    if make_url(url).get_backend_name() == "sqlite":
        # FastAPI runs sync endpoints on a thread pool
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True, "pool_size": 10, "max_overflow": 20}


engine = create_engine(
    settings.DATABASE_URL,
    echo=False,                  # Set True to log all SQL queries (debug only)
    **_engine_kwargs(settings.DATABASE_URL),
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def enable_sqlite_foreign_keys(target_engine):
    """Turn on FK enforcement (history.breaker_id ON DELETE SET NULL) for SQLite connections."""
    if target_engine.dialect.name != "sqlite":
        return

    @event.listens_for(target_engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


enable_sqlite_foreign_keys(engine)


def get_db():
    """FastAPI dependency — yields a DB session and closes it after request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _ensure_sqlite_dir(url: str):
    parsed = make_url(url)
    if parsed.get_backend_name() == "sqlite" and parsed.database and parsed.database != ":memory:":
        os.makedirs(os.path.dirname(os.path.abspath(parsed.database)), exist_ok=True)


def create_tables(bind=None):
    """
    Creates all DB tables on startup. Safe to call multiple times.
    Import all models here so SQLAlchemy knows about them.
    """
    from loto.models.breaker import Breaker              # noqa
    from loto.models.lock import Lock                    # noqa
    from loto.models.personnel import Personnel          # noqa
    from loto.models.plan import Plan                    # noqa
    from loto.models.history_entry import HistoryEntry   # noqa

    if bind is None:
        _ensure_sqlite_dir(settings.DATABASE_URL)
        bind = engine
    Base.metadata.create_all(bind=bind)
