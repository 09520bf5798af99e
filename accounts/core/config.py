"""
Configuration helpers for the accounts backend.

Every setting is read from an environment variable once and cached; tests call
``get_settings.cache_clear()`` after changing the environment.
"""

from dataclasses import dataclass
from functools import lru_cache
import os

ERROR_STATUS_DETAILED = "detailed"
ERROR_STATUS_COLLAPSED = "collapsed"


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    database_url: str
    log_level: str
    host: str
    port: int
    user_route_prefix: str
    user_register_path: str
    error_status_mode: str
    reset_requires_non_empty_password: bool
    create_tables_on_startup: bool


def _normalize_path(value: str) -> str:
    path = (value or "").strip().rstrip("/")
    if path and not path.startswith("/"):
        path = "/" + path
    return path


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    mode = (os.getenv("ERROR_STATUS_MODE") or ERROR_STATUS_DETAILED).strip().lower()
    if mode not in {ERROR_STATUS_DETAILED, ERROR_STATUS_COLLAPSED}:
        mode = ERROR_STATUS_DETAILED

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        database_url=os.getenv("DATABASE_URL", "sqlite:///./accounts.db"),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        host=os.getenv("HOST", "127.0.0.1"),
        port=_int(os.getenv("PORT", "8000"), 8000),
        user_route_prefix=_normalize_path(os.getenv("USER_ROUTE_PREFIX", "/user")),
        user_register_path=_normalize_path(os.getenv("USER_REGISTER_PATH", "")),
        error_status_mode=mode,
        reset_requires_non_empty_password=_bool(os.getenv("RESET_REQUIRES_NON_EMPTY_PASSWORD"), False),
        create_tables_on_startup=_bool(os.getenv("CREATE_TABLES_ON_STARTUP"), True),
    )
