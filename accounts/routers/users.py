from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Request
from fastapi.responses import JSONResponse

from accounts.core.config import ERROR_STATUS_COLLAPSED, Settings, get_settings
from accounts.domain.users import is_reset_body_valid, is_user_body_valid
from accounts.services.user_service import (
    AccountError,
    DuplicateUsernameError,
    InvalidCredentialsError,
    PersistenceError,
    UserNotFoundError,
    UserService,
    ValidationError,
)

CREATE = "create"
LOGIN = "login"
FETCH = "fetch"
DELETE = "delete"
RESET = "reset"

DOMAIN_STATUS = {
    DuplicateUsernameError: 409,
    InvalidCredentialsError: 401,
    UserNotFoundError: 404,
}

# Legacy one-tier table: every non-validation failure of an operation shares one status.
COLLAPSED_STATUS = {
    CREATE: 400,
    LOGIN: 401,
    FETCH: 404,
    DELETE: 404,
    RESET: 404,
}


def status_for(operation: str, exc: AccountError, mode: str) -> int:
    """Translate an operation failure into an HTTP status code."""
    if isinstance(exc, ValidationError):
        return 400
    if mode == ERROR_STATUS_COLLAPSED:
        return COLLAPSED_STATUS[operation]
    if isinstance(exc, PersistenceError):
        return 500
    for error_type, status in DOMAIN_STATUS.items():
        if isinstance(exc, error_type):
            return status
    return 500


def _get_user_service(request: Request) -> UserService:
    svc = getattr(getattr(request.app, "state", None), "user_service", None)
    if not svc:
        raise RuntimeError("UserService not configured")
    return svc


INVALID_BODY_MESSAGES = {
    CREATE: "Invalid user body",
    LOGIN: "Invalid login credentials",
    RESET: "Invalid reset body",
}


def _register_path(settings: Settings) -> str:
    if not settings.user_register_path and not settings.user_route_prefix:
        return "/"
    return settings.user_register_path


def invalid_body_messages(settings: Settings) -> dict[tuple[str, str], str]:
    """Map (method, full path) of each body-carrying route to its rejection message."""
    prefix = settings.user_route_prefix
    return {
        ("POST", prefix + _register_path(settings)): INVALID_BODY_MESSAGES[CREATE],
        ("POST", prefix + "/login"): INVALID_BODY_MESSAGES[LOGIN],
        ("PATCH", prefix + "/reset"): INVALID_BODY_MESSAGES[RESET],
    }


def build_router(settings: Settings | None = None) -> APIRouter:
    """Create the /user router using the route and error-mapping choices in ``settings``."""
    settings = settings or get_settings()
    mode = settings.error_status_mode
    router = APIRouter(prefix=settings.user_route_prefix, tags=["users"])

    def _error(operation: str, exc: AccountError) -> JSONResponse:
        return JSONResponse({"error": exc.message}, status_code=status_for(operation, exc, mode))

    def create_user(request: Request, payload: Any = Body(None)):
        if not is_user_body_valid(payload):
            return _error(CREATE, ValidationError(INVALID_BODY_MESSAGES[CREATE]))
        svc = _get_user_service(request)
        # dateJoined is stamped by the service; anything else in the body is ignored.
        try:
            return svc.create_user(payload["username"], payload["password"])
        except AccountError as exc:
            return _error(CREATE, exc)

    def login(request: Request, payload: Any = Body(None)):
        if not is_user_body_valid(payload):
            return _error(LOGIN, ValidationError(INVALID_BODY_MESSAGES[LOGIN]))
        svc = _get_user_service(request)
        try:
            return svc.login(payload["username"], payload["password"])
        except AccountError as exc:
            return _error(LOGIN, exc)

    def reset_password(request: Request, payload: Any = Body(None)):
        if not is_reset_body_valid(payload, require_non_empty=settings.reset_requires_non_empty_password):
            return _error(RESET, ValidationError(INVALID_BODY_MESSAGES[RESET]))
        svc = _get_user_service(request)
        try:
            return svc.reset_password(payload["username"], payload["password"])
        except AccountError as exc:
            return _error(RESET, exc)

    def get_user(request: Request, username: str):
        svc = _get_user_service(request)
        try:
            return svc.get_user(username)
        except AccountError as exc:
            return _error(FETCH, exc)

    def delete_user(request: Request, username: str):
        svc = _get_user_service(request)
        try:
            return svc.delete_user(username)
        except AccountError as exc:
            return _error(DELETE, exc)

    def get_user_empty(request: Request):
        return get_user(request, "")

    def delete_user_empty(request: Request):
        return delete_user(request, "")

    router.add_api_route(_register_path(settings), create_user, methods=["POST"], status_code=201)
    router.add_api_route("/login", login, methods=["POST"], status_code=200)
    router.add_api_route("/reset", reset_password, methods=["PATCH"], status_code=200)
    router.add_api_route("/{username}", get_user, methods=["GET"], status_code=200)
    router.add_api_route("/{username}", delete_user, methods=["DELETE"], status_code=200)
    # Empty path segment: looked up like any other name, which can never match.
    router.add_api_route("/", get_user_empty, methods=["GET"], status_code=200)
    router.add_api_route("/", delete_user_empty, methods=["DELETE"], status_code=200)
    return router
