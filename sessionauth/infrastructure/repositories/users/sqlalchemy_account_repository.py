# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from sessionauth.domain.users.entities import Account as DomainAccount
from sessionauth.domain.users.entities import NewAccount
from sessionauth.domain.users.exceptions import IdentifierTakenError
from sessionauth.domain.users.repositories import AccountRepository
from sessionauth.infrastructure.db.models import Account
from sessionauth.infrastructure.db.session import session_scope
from sessionauth.shared.logging import logger


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _to_domain(row: Account) -> DomainAccount:
    return DomainAccount(
        id=row.id,
        username=row.username,
        first_name=row.first_name or "",
        last_name=row.last_name or "",
        password_hash=row.password_hash,
        avatar=row.avatar,
        created_at=_as_utc(row.created_at),
    )


class SqlAlchemyAccountRepository(AccountRepository):
    def __init__(self, session_factory: Callable[[], Session] | None = None):
        self._session_factory = session_factory

    def find_by_username(self, username: str) -> DomainAccount | None:
        with session_scope(self._session_factory) as session:
            row = session.query(Account).filter(Account.username == username).first()
            return _to_domain(row) if row else None

    def find_by_id(self, account_id: int) -> DomainAccount | None:
        with session_scope(self._session_factory) as session:
            row = session.get(Account, account_id)
            return _to_domain(row) if row else None

    def add(self, account: NewAccount) -> DomainAccount:
        try:
            with session_scope(self._session_factory) as session:
                row = Account(
                    username=account.username,
                    first_name=account.first_name,
                    last_name=account.last_name,
                    password_hash=account.password_hash,
                    avatar=account.avatar,
                )
                session.add(row)
                session.flush()
                session.refresh(row)
                return _to_domain(row)
        except IntegrityError as exc:
            logger.warning(f"accounts.add: unique violation username={account.username}")
            raise IdentifierTakenError(account.username) from exc


__all__ = ["SqlAlchemyAccountRepository"]
