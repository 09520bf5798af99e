"""Run the accounts API with uvicorn: ``python -m accounts``."""
from __future__ import annotations

import argparse

import uvicorn

from accounts.app import create_app
from accounts.core.config import get_settings


def main(argv: list[str] | None = None) -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Accounts API server")
    parser.add_argument("--host", default=settings.host, help="Interface to bind (default: HOST)")
    parser.add_argument("--port", type=int, default=settings.port, help="Port to bind (default: PORT)")
    args = parser.parse_args(argv)

    uvicorn.run(
        create_app(settings),
        host=args.host,
        port=args.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
