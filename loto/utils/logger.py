"""
Centralised logging for the LOTO backend.
Console + rotating activity log (settings.LOG_DIR/loto.log). Lock claims and
releases, cascades and resyncs all land in the activity log, next to the
append-only history table.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from loto.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_FILE = "loto.log"

# Third-party loggers that drown the activity log at INFO
_QUIET_LOGGERS = ("sqlalchemy.engine", "uvicorn.access", "httpx")

_configured = False


def _log_dir() -> str:
    if settings.LOG_DIR:
        return settings.LOG_DIR
    return os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "logs")


def _configure_root_logger():
    global _configured
    if _configured:
        return
    _configured = True

    level = settings.LOG_LEVEL.upper()
    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    console = logging.StreamHandler()
    console.setFormatter(fmt)

    log_dir = _log_dir()
    os.makedirs(log_dir, exist_ok=True)
    activity = RotatingFileHandler(
        filename=os.path.join(log_dir, LOG_FILE),
        maxBytes=settings.LOG_MAX_BYTES,
        backupCount=settings.LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    activity.setFormatter(fmt)

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(console)
    root.addHandler(activity)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a named logger. Call this at the top of every module."""
    _configure_root_logger()
    return logging.getLogger(name)
