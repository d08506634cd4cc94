"""
Application Configuration.

Pydantic Settings model for the SellerHub data-access layer.
All configuration is loaded from environment variables and .env files.
Inject an AppConfig instance via dependency injection where needed.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings
from pydantic import Field, SecretStr, field_validator, model_validator


class AppConfig(BaseSettings):
    """Central configuration loaded from environment variables and defaults."""

    # --- Supabase (remote source) ---
    SUPABASE_URL: str = ""
    SUPABASE_ANON_KEY: SecretStr = SecretStr("")
    SELLERS_TABLE: str = "sellers"

    # --- SQLite (local cache) ---
    SQLITE_PATH: Path = Path("sellerhub_local.db")

    # --- Logging ---
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "sellerhub.log"
    LOG_MAX_BYTES: int = Field(default=5_242_880, gt=0)  # 5 MB
    LOG_BACKUP_COUNT: int = Field(default=3, ge=0)

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @field_validator("LOG_LEVEL")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    @model_validator(mode="after")
    def _warn_missing_env(self) -> "AppConfig":
        """Emit a startup warning when the remote source is not configured.

        Without Supabase credentials every remote call fails with a
        transport error, and only the cached seller list can be served.
        """
        _log = logging.getLogger("sellerhub.config")

        if not self.SUPABASE_URL:
            _log.warning(
                "SUPABASE_URL is empty — remote seller source is disabled. "
                "Only cached sellers will be available."
            )

        return self

    @property
    def log_level_number(self) -> int:
        """Numeric ``logging`` level for :attr:`LOG_LEVEL`."""
        return logging.getLevelNamesMapping()[self.LOG_LEVEL]


# ---------------------------------------------------------------------------
# Module-level singleton factory
# ---------------------------------------------------------------------------

_config_instance: Optional[AppConfig] = None
_config_lock: threading.Lock = threading.Lock()


def get_config() -> AppConfig:
    """Return a cached ``AppConfig`` singleton.

    Uses a check-lock-check pattern so the fast path avoids the lock
    while first initialisation stays thread-safe.
    """
    global _config_instance
    if _config_instance is None:
        with _config_lock:
            if _config_instance is None:
                _config_instance = AppConfig()
    return _config_instance


def reset_config() -> None:
    """Drop the cached singleton so the next ``get_config()`` re-reads the environment."""
    global _config_instance
    with _config_lock:
        _config_instance = None
