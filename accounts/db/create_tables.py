"""Create (or drop) the accounts schema.

Run ``python -m accounts.db.create_tables`` against ``DATABASE_URL`` before the
first start when ``CREATE_TABLES_ON_STARTUP`` is disabled.
"""
from __future__ import annotations

import logging

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from .session import Base, get_engine
from . import models  # noqa: F401  # ensure models are imported for metadata

logger = logging.getLogger("accounts.db")


def create_all(engine: Engine | None = None) -> None:
    bind = engine or get_engine()
    Base.metadata.create_all(bind=bind)
    logger.debug("Schema ready on %s", bind.url.render_as_string(hide_password=True))


def drop_all(engine: Engine | None = None) -> None:
    Base.metadata.drop_all(bind=engine or get_engine())


if __name__ == "__main__":
    from accounts.core.config import get_settings
    from accounts.core.logging_config import configure_logging

    configure_logging(get_settings().log_level)
    try:
        create_all()
        logger.info("Database tables created successfully.")
    except SQLAlchemyError as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
