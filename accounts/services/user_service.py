"""
Account use cases: register, login, lookup, delete and password reset.

Each operation wraps a single repository call, strips the password from any
record it hands back and turns storage failures into an ``AccountError``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
import logging

from sqlalchemy.exc import SQLAlchemyError

from accounts.domain.users import safe_user_view
from accounts.repositories.user_repository import DuplicateKeyError, UserRepository

logger = logging.getLogger("accounts.services.users")


class AccountError(Exception):
    """Base class for account-related failures."""

    default_message = "Account operation failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AccountError):
    default_message = "Invalid user body"


class DuplicateUsernameError(AccountError):
    default_message = "Username already exists"


class InvalidCredentialsError(AccountError):
    default_message = "Invalid username or password"


class UserNotFoundError(AccountError):
    default_message = "User not found"


class PersistenceError(AccountError):
    """Any storage failure other than a duplicate username."""


@dataclass
class UserService:
    """Handles registration, login, lookup, deletion and password reset."""

    repository: UserRepository = field(default_factory=UserRepository)

    def _now(self) -> datetime:
        return datetime.now(timezone.utc)

    # -------------------------------------- registration --------------------------------------
    def create_user(self, username: str, password: str) -> dict:
        try:
            entity = self.repository.create(username, password, date_joined=self._now())
        except DuplicateKeyError as exc:
            logger.info("Registration rejected, username taken: %s", username)
            raise DuplicateUsernameError() from exc
        except SQLAlchemyError as exc:
            logger.exception("Could not save user %s", username)
            raise PersistenceError("Could not save user") from exc
        logger.info("User registered: %s", username)
        return safe_user_view(entity)

    # -------------------------------------- login --------------------------------------
    def login(self, username: str, password: str) -> dict:
        try:
            entity = self.repository.find_one(username)
        except SQLAlchemyError as exc:
            logger.exception("Login lookup failed for %s", username)
            raise PersistenceError("Login failed") from exc
        # Same error for unknown users and wrong passwords.
        if entity is None or entity.password != password:
            raise InvalidCredentialsError()
        return safe_user_view(entity)

    # -------------------------------------- lookup --------------------------------------
    def get_user(self, username: str) -> dict:
        try:
            entity = self.repository.find_one(username)
        except SQLAlchemyError as exc:
            logger.exception("Failed to retrieve user %s", username)
            raise PersistenceError("Failed to retrieve user") from exc
        if entity is None:
            raise UserNotFoundError()
        return safe_user_view(entity)

    def delete_user(self, username: str) -> dict:
        try:
            row = self.repository.find_one_and_delete(username)
        except SQLAlchemyError as exc:
            logger.exception("Failed to delete user %s", username)
            raise PersistenceError("Failed to delete user") from exc
        if row is None:
            raise UserNotFoundError()
        logger.info("User deleted: %s", username)
        return safe_user_view(row)

    # -------------------------------------- password reset --------------------------------------
    def reset_password(self, username: str, password: str) -> dict:
        try:
            row = self.repository.find_one_and_update(username, password=password)
        except SQLAlchemyError as exc:
            logger.exception("Failed to update user %s", username)
            raise PersistenceError("Failed to update user") from exc
        if row is None:
            raise UserNotFoundError()
        logger.info("Password reset for %s", username)
        return safe_user_view(row)
