from __future__ import annotations

from datetime import datetime, timezone

import pytest
from sqlalchemy.exc import OperationalError

from accounts.repositories.user_repository import UserRepository
from accounts.services.user_service import (
    DuplicateUsernameError,
    InvalidCredentialsError,
    PersistenceError,
    UserNotFoundError,
    UserService,
)


class BrokenRepository:
    """Repository whose every call fails like a lost database connection."""

    def _fail(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    create = find_one = find_one_and_delete = find_one_and_update = _fail


def _as_utc(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


@pytest.fixture()
def svc(db_env):
    return UserService(repository=UserRepository())


def test_create_user_returns_safe_view_stamped_now(svc):
    before = datetime.now(timezone.utc)
    view = svc.create_user("alice", "p1")
    after = datetime.now(timezone.utc)

    assert "password" not in view
    assert view["username"] == "alice"
    assert view["id"]
    assert before <= _as_utc(view["dateJoined"]) <= after


def test_create_user_duplicate_keeps_cardinality(svc):
    svc.create_user("alice", "p1")

    with pytest.raises(DuplicateUsernameError) as excinfo:
        svc.create_user("alice", "p2")

    assert excinfo.value.message == "Username already exists"
    assert svc.repository.count() == 1


def test_login_does_not_distinguish_unknown_user_from_wrong_password(svc):
    svc.create_user("alice", "p1")

    with pytest.raises(InvalidCredentialsError) as missing:
        svc.login("nobody", "p1")
    with pytest.raises(InvalidCredentialsError) as wrong:
        svc.login("alice", "wrong")

    assert missing.value.message == wrong.value.message

    view = svc.login("alice", "p1")
    assert view["username"] == "alice"
    assert "password" not in view


def test_login_compares_passwords_exactly(svc):
    svc.create_user("alice", "p1")
    with pytest.raises(InvalidCredentialsError):
        svc.login("alice", "p1 ")


def test_get_user_and_not_found(svc):
    created = svc.create_user("alice", "p1")

    assert svc.get_user("alice") == created
    with pytest.raises(UserNotFoundError):
        svc.get_user("bob")
    with pytest.raises(UserNotFoundError):
        svc.get_user("")


def test_delete_user_succeeds_once(svc):
    created = svc.create_user("alice", "p1")

    deleted = svc.delete_user("alice")
    assert deleted == created

    with pytest.raises(UserNotFoundError):
        svc.delete_user("alice")


def test_reset_password_changes_only_password(svc):
    created = svc.create_user("alice", "p1")

    updated = svc.reset_password("alice", "p2")
    assert updated == created
    assert "password" not in updated

    assert svc.get_user("alice") == created
    assert svc.login("alice", "p2")["username"] == "alice"
    with pytest.raises(InvalidCredentialsError):
        svc.login("alice", "p1")


def test_reset_password_unknown_user(svc):
    with pytest.raises(UserNotFoundError):
        svc.reset_password("ghost", "p2")


@pytest.mark.parametrize(
    "call, message",
    [
        (lambda s: s.create_user("alice", "p1"), "Could not save user"),
        (lambda s: s.login("alice", "p1"), "Login failed"),
        (lambda s: s.get_user("alice"), "Failed to retrieve user"),
        (lambda s: s.delete_user("alice"), "Failed to delete user"),
        (lambda s: s.reset_password("alice", "p2"), "Failed to update user"),
    ],
)
def test_storage_failures_become_persistence_errors(call, message):
    svc = UserService(repository=BrokenRepository())

    with pytest.raises(PersistenceError) as excinfo:
        call(svc)

    assert excinfo.value.message == message
    assert "connection refused" not in str(excinfo.value)


def test_missing_database_url_becomes_persistence_error(missing_db_url):
    svc = UserService(repository=UserRepository())

    with pytest.raises(PersistenceError) as excinfo:
        svc.get_user("alice")

    assert excinfo.value.message == "Failed to retrieve user"
