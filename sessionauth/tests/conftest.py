from __future__ import annotations

import os
import secrets
import tempfile
from datetime import UTC, datetime, timedelta

import pytest

_TMP = tempfile.mkdtemp(prefix="sessionauth-tests-")
os.environ.setdefault("DATABASE_URL", f"sqlite:///{os.path.join(_TMP, 'test.db')}")
os.environ.setdefault("LOG_FILE", os.path.join(_TMP, "app.log"))
os.environ.setdefault("AUTH_BCRYPT_ROUNDS", "4")

from sessionauth.domain.users.entities import Account, NewAccount, SessionRecord  # noqa: E402
from sessionauth.domain.users.exceptions import IdentifierTakenError  # noqa: E402
from sessionauth.domain.users.repositories import (  # noqa: E402
    AccountRepository,
    PasswordHasher,
    SessionStore,
)


class InMemoryAccountRepository(AccountRepository):
    def __init__(self) -> None:
        self._accounts: dict[str, Account] = {}
        self._seq = 1
        self.lookups: list[str] = []
        self.writes: list[NewAccount] = []

    def find_by_username(self, username: str) -> Account | None:
        self.lookups.append(username)
        return self._accounts.get(username)

    def find_by_id(self, account_id: int) -> Account | None:
        for account in self._accounts.values():
            if account.id == account_id:
                return account
        return None

    def add(self, account: NewAccount) -> Account:
        if account.username in self._accounts:
            raise IdentifierTakenError(account.username)
        self.writes.append(account)
        created = Account(
            id=self._seq,
            username=account.username,
            first_name=account.first_name,
            last_name=account.last_name,
            password_hash=account.password_hash,
            avatar=account.avatar,
            created_at=datetime.now(UTC),
        )
        self._seq += 1
        self._accounts[created.username] = created
        return created


class InMemorySessionStore(SessionStore):
    def __init__(self, browser_ttl: timedelta = timedelta(days=1)) -> None:
        self.records: dict[str, SessionRecord] = {}
        self._browser_ttl = browser_ttl

    def get(self, token: str) -> SessionRecord | None:
        record = self.records.get(token)
        if record and record.is_expired(datetime.now(UTC), self._browser_ttl):
            self.records.pop(token, None)
            return None
        return record

    def issue(self, *, account_id: int | None, expires_at: datetime | None) -> SessionRecord:
        record = SessionRecord(
            token=secrets.token_urlsafe(16),
            account_id=account_id,
            expires_at=expires_at,
            created_at=datetime.now(UTC),
        )
        self.records[record.token] = record
        return record

    def destroy(self, token: str) -> None:
        self.records.pop(token, None)


class DeterministicHasher(PasswordHasher):
    def __init__(self) -> None:
        self.hashed: list[str] = []
        self.verified: list[str] = []

    def hash(self, password: str) -> str:
        self.hashed.append(password)
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        self.verified.append(hashed)
        return hashed == f"hashed:{password}"


@pytest.fixture()
def accounts() -> InMemoryAccountRepository:
    return InMemoryAccountRepository()


@pytest.fixture()
def sessions() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture()
def hasher() -> DeterministicHasher:
    return DeterministicHasher()


@pytest.fixture()
def clean_db():
    from sessionauth.infrastructure.db import ENGINE, Base, init_db

    Base.metadata.drop_all(bind=ENGINE)
    init_db()
    yield
    Base.metadata.drop_all(bind=ENGINE)
