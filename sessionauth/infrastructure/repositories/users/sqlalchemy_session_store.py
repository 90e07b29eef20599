# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from sqlalchemy import and_, or_
from sqlalchemy.orm import Session

from sessionauth.domain.users.entities import SessionRecord
from sessionauth.domain.users.repositories import SessionStore
from sessionauth.infrastructure.db.models import AuthSession
from sessionauth.infrastructure.db.session import session_scope
from sessionauth.infrastructure.repositories.users.sqlalchemy_account_repository import _as_utc
from sessionauth.shared.logging import logger

TOKEN_BYTES = 48


def _to_domain(row: AuthSession) -> SessionRecord:
    return SessionRecord(
        token=row.token,
        account_id=row.account_id,
        expires_at=_as_utc(row.expires_at) if row.expires_at else None,
        created_at=_as_utc(row.created_at),
    )


class SqlAlchemySessionStore(SessionStore):
    def __init__(
        self,
        session_factory: Callable[[], Session] | None = None,
        *,
        browser_session_ttl: timedelta = timedelta(days=1),
    ):
        self._session_factory = session_factory
        self._browser_session_ttl = browser_session_ttl

    def get(self, token: str) -> SessionRecord | None:
        if not token:
            return None
        with session_scope(self._session_factory) as session:
            row = session.query(AuthSession).filter(AuthSession.token == token).first()
            if not row:
                return None
            record = _to_domain(row)
            if record.is_expired(datetime.now(UTC), self._browser_session_ttl):
                session.delete(row)
                logger.debug(f"sessions.get: dropped expired session account={record.account_id}")
                return None
            return record

    def issue(self, *, account_id: int | None, expires_at: datetime | None) -> SessionRecord:
        with session_scope(self._session_factory) as session:
            row = AuthSession(
                token=secrets.token_urlsafe(TOKEN_BYTES),
                account_id=account_id,
                expires_at=expires_at,
                created_at=datetime.now(UTC),
            )
            session.add(row)
            session.flush()
            record = _to_domain(row)
        logger.debug(
            f"sessions.issue: account={account_id} "
            f"exp={expires_at.isoformat() if expires_at else 'browser'}"
        )
        return record

    def destroy(self, token: str) -> None:
        with session_scope(self._session_factory) as session:
            deleted = session.query(AuthSession).filter(AuthSession.token == token).delete()
        logger.debug(f"sessions.destroy: removed={deleted}")

    def purge_expired(self, now: datetime | None = None) -> int:
        now = (now or datetime.now(UTC)).astimezone(UTC)
        dead = or_(
            and_(AuthSession.expires_at.is_not(None), AuthSession.expires_at <= now),
            and_(
                AuthSession.expires_at.is_(None),
                AuthSession.created_at <= now - self._browser_session_ttl,
            ),
        )
        with session_scope(self._session_factory) as session:
            removed = (
                session.query(AuthSession).filter(dead).delete(synchronize_session=False)
            )
        if removed:
            logger.info(f"sessions.purge: removed {removed} expired sessions")
        return removed


__all__ = ["SqlAlchemySessionStore"]
