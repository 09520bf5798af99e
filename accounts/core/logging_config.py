"""Logging setup for the accounts service."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_HANDLER_NAME = "accounts-stream"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a single stdout handler to the ``accounts`` logger."""
    logger = logging.getLogger("accounts")
    logger.setLevel(getattr(logging, (level or "INFO").upper(), logging.INFO))
    # create_app may run more than once per process (tests, reloads)
    if not any(h.get_name() == _HANDLER_NAME for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
