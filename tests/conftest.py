from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Keep the package importable when tests run from a plain checkout.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from accounts.core import config as core_config  # noqa: E402
from accounts.db import create_tables  # noqa: E402
from accounts.db import reset_engine  # noqa: E402


@pytest.fixture()
def db_env(tmp_path, monkeypatch):
    """Point DATABASE_URL at a temporary SQLite file and reset cached settings/engine."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    monkeypatch.setenv("CREATE_TABLES_ON_STARTUP", "1")
    core_config.get_settings.cache_clear()
    reset_engine()

    create_tables.create_all()

    yield db_file

    try:
        create_tables.drop_all()
    finally:
        reset_engine()
        core_config.get_settings.cache_clear()


@pytest.fixture()
def missing_db_url(monkeypatch):
    """Blank DATABASE_URL so every repository call fails before reaching a database."""
    monkeypatch.setenv("DATABASE_URL", "")
    core_config.get_settings.cache_clear()
    reset_engine()

    yield

    reset_engine()
    core_config.get_settings.cache_clear()
