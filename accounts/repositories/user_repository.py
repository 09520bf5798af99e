"""User persistence backed by SQLAlchemy."""
from __future__ import annotations

from contextlib import AbstractContextManager
from datetime import datetime
from typing import Callable, Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.engine import Row
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from accounts.db.models import User
from accounts.db.session import get_session

SessionFactory = Callable[[], AbstractContextManager[Session]]

# Columns that may leave the repository for delete/update results.
_PUBLIC_COLUMNS = (User.id, User.username, User.date_joined)


class DuplicateKeyError(Exception):
    """Raised when an insert violates the unique username constraint."""

    def __init__(self, username: str):
        super().__init__(f"username already exists: {username}")
        self.username = username


def is_unique_violation(exc: IntegrityError) -> bool:
    orig = getattr(exc, "orig", None)
    # psycopg exposes the SQLSTATE, sqlite/mysql only the message.
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code:
        return code == "23505"
    message = str(orig or exc).lower()
    return "unique" in message or "duplicate" in message


class UserRepository:
    """CRUD primitives over the users table, keyed by username."""

    def __init__(self, session_factory: SessionFactory = get_session) -> None:
        self._session_factory = session_factory

    def create(self, username: str, password: str, date_joined: datetime) -> User:
        entity = User(username=username, password=password, date_joined=date_joined)
        with self._session_factory() as session:
            session.add(entity)
            try:
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                if is_unique_violation(exc):
                    raise DuplicateKeyError(username) from exc
                raise
            session.refresh(entity)
            return entity

    def find_one(self, username: str) -> Optional[User]:
        with self._session_factory() as session:
            stmt = select(User).where(User.username == username)
            return session.execute(stmt).scalar_one_or_none()

    def find_one_and_delete(self, username: str) -> Optional[Row]:
        """Remove the matching row in a single statement and return its public columns."""
        with self._session_factory() as session:
            stmt = (
                delete(User)
                .where(User.username == username)
                .returning(*_PUBLIC_COLUMNS)
                .execution_options(synchronize_session=False)
            )
            row = session.execute(stmt).one_or_none()
            session.commit()
            return row

    def find_one_and_update(self, username: str, **values) -> Optional[Row]:
        """Apply ``values`` to the matching row and return its public columns after the update."""
        if not values:
            raise ValueError("find_one_and_update requires at least one column to set")
        with self._session_factory() as session:
            stmt = (
                update(User)
                .where(User.username == username)
                .values(**values)
                .returning(*_PUBLIC_COLUMNS)
                .execution_options(synchronize_session=False)
            )
            row = session.execute(stmt).one_or_none()
            session.commit()
            return row

    def count(self) -> int:
        with self._session_factory() as session:
            return int(session.scalar(select(func.count()).select_from(User)) or 0)
