from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from sessionauth.domain.users.entities import NewAccount
from sessionauth.domain.users.exceptions import IdentifierTakenError
from sessionauth.infrastructure.db import SessionLocal
from sessionauth.infrastructure.db.models import AuthSession
from sessionauth.infrastructure.repositories.users.sqlalchemy_account_repository import (
    SqlAlchemyAccountRepository,
)
from sessionauth.infrastructure.repositories.users.sqlalchemy_session_store import (
    SqlAlchemySessionStore,
)

pytestmark = pytest.mark.usefixtures("clean_db")


def _new_account(username: str = "alice") -> NewAccount:
    return NewAccount(
        username=username,
        first_name="Alice",
        last_name="Liddell",
        password_hash="$2b$04$" + "x" * 53,
        avatar=None,
    )


def test_account_round_trip() -> None:
    repo = SqlAlchemyAccountRepository(SessionLocal)

    created = repo.add(_new_account())

    found = repo.find_by_username("alice")
    assert found == created
    assert repo.find_by_id(created.id) == created
    assert found.created_at.tzinfo is not None
    assert repo.find_by_username("bob") is None


def test_duplicate_username_is_rejected_by_the_store() -> None:
    repo = SqlAlchemyAccountRepository(SessionLocal)
    repo.add(_new_account())

    with pytest.raises(IdentifierTakenError) as excinfo:
        repo.add(_new_account())

    assert "alice" in excinfo.value.user_message()


def test_session_issue_get_destroy() -> None:
    store = SqlAlchemySessionStore(SessionLocal)
    account = SqlAlchemyAccountRepository(SessionLocal).add(_new_account())

    record = store.issue(account_id=account.id, expires_at=None)

    loaded = store.get(record.token)
    assert loaded is not None
    assert loaded.account_id == account.id
    assert loaded.is_authenticated

    store.destroy(record.token)
    assert store.get(record.token) is None


def test_tokens_are_unique_and_opaque() -> None:
    store = SqlAlchemySessionStore(SessionLocal)

    tokens = {store.issue(account_id=None, expires_at=None).token for _ in range(5)}

    assert len(tokens) == 5
    assert all(len(token) >= 48 for token in tokens)


def test_persistent_session_expires_at_deadline() -> None:
    store = SqlAlchemySessionStore(SessionLocal)
    expired = store.issue(account_id=None, expires_at=datetime.now(UTC) - timedelta(seconds=1))
    alive = store.issue(account_id=None, expires_at=datetime.now(UTC) + timedelta(days=14))

    assert store.get(expired.token) is None
    loaded = store.get(alive.token)
    assert loaded is not None
    assert loaded.expires_at == alive.expires_at


def test_browser_session_bounded_by_ttl() -> None:
    store = SqlAlchemySessionStore(SessionLocal, browser_session_ttl=timedelta(hours=1))
    record = store.issue(account_id=None, expires_at=None)

    db = SessionLocal()
    try:
        row = db.query(AuthSession).filter(AuthSession.token == record.token).one()
        row.created_at = datetime.now(UTC) - timedelta(hours=2)
        db.commit()
    finally:
        db.close()
        SessionLocal.remove()

    assert store.get(record.token) is None


def test_purge_expired_removes_only_dead_sessions() -> None:
    store = SqlAlchemySessionStore(SessionLocal)
    store.issue(account_id=None, expires_at=datetime.now(UTC) - timedelta(minutes=5))
    alive = store.issue(account_id=None, expires_at=None)

    assert store.purge_expired() == 1
    assert store.get(alive.token) is not None


def test_purge_expired_drops_browser_sessions_past_ttl() -> None:
    store = SqlAlchemySessionStore(SessionLocal, browser_session_ttl=timedelta(hours=1))
    stale = store.issue(account_id=None, expires_at=None)
    fresh = store.issue(account_id=None, expires_at=None)
    remembered = store.issue(account_id=None, expires_at=datetime.now(UTC) + timedelta(days=14))

    db = SessionLocal()
    try:
        row = db.query(AuthSession).filter(AuthSession.token == stale.token).one()
        row.created_at = datetime.now(UTC) - timedelta(hours=2)
        db.commit()
    finally:
        db.close()
        SessionLocal.remove()

    assert store.purge_expired() == 1
    assert store.get(fresh.token) is not None
    assert store.get(remembered.token) is not None
    assert store.purge_expired(datetime.now(UTC) + timedelta(days=15)) == 2
