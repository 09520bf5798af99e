"""FastAPI application factory for the accounts service."""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from accounts.core.config import Settings, get_settings
from accounts.core.logging_config import configure_logging
from accounts.db.create_tables import create_all
from accounts.repositories.user_repository import UserRepository
from accounts.routers import users as users_router
from accounts.services.user_service import UserService

logger = logging.getLogger("accounts.app")


def create_app(settings: Settings | None = None, service: UserService | None = None) -> FastAPI:
    """
    Build the application. ``service`` lets callers supply a UserService wired
    to their own repository; by default one is built on the configured database.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Accounts API")

    if service is None:
        if settings.create_tables_on_startup:
            create_all()
        service = UserService(repository=UserRepository())
    app.state.user_service = service
    app.state.settings = settings
    body_messages = users_router.invalid_body_messages(settings)

    @app.exception_handler(RequestValidationError)
    async def _invalid_body(request: Request, exc: RequestValidationError):
        # Unparseable JSON is reported with the same message as the route's own body check.
        logger.debug("Rejected request body on %s: %s", request.url.path, exc.errors())
        fallback = users_router.INVALID_BODY_MESSAGES[users_router.CREATE]
        message = body_messages.get((request.method, request.url.path), fallback)
        return JSONResponse({"error": message}, status_code=400)

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse({"error": "Internal server error"}, status_code=500)

    @app.get("/health")
    def health():
        return {"ok": True}

    app.include_router(users_router.build_router(settings))
    logger.info(
        "Accounts API ready (env=%s, prefix=%s, errors=%s)",
        settings.app_env,
        settings.user_route_prefix or "/",
        settings.error_status_mode,
    )
    return app
