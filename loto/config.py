"""
Application configuration using Pydantic-Settings.
All settings can be overridden via environment variables or .env file.
Loaded once at import time; nothing mutates it afterwards.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # ── Application ───────────────────────────────────────────────────────
    APP_NAME: str = "LOTO Tracker"
    APP_VERSION: str = "1.0.0"

    # ── Database ──────────────────────────────────────────────────────────
    DATABASE_URL: str = "sqlite:///./data/loto.db"

    # ── Network ───────────────────────────────────────────────────────────
    BACKEND_HOST: str = "127.0.0.1"
    BACKEND_PORT: int = 8080

    # ── Access mode ───────────────────────────────────────────────────────
    EDITOR_ACCESS_CODE: str = "CHANGE_ME"   # Shared code that unlocks Editor mode

    # ── History ───────────────────────────────────────────────────────────
    DEFAULT_HISTORY_LIMIT: int = 100        # 0 = full log

    # ── Logging ───────────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None            # Defaults to <repo>/logs
    LOG_MAX_BYTES: int = 5 * 1024 * 1024
    LOG_BACKUP_COUNT: int = 10

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
