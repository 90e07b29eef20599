# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
from datetime import UTC, datetime, timedelta

from sessionauth.application.use_cases.users.session_promotion import AuthResult, promote_session
from sessionauth.domain.users.entities import SessionRecord
from sessionauth.domain.users.exceptions import InvalidCredentialsError
from sessionauth.domain.users.repositories import AccountRepository, PasswordHasher, SessionStore
from sessionauth.shared.logging import logger


class SignInUseCase:
    def __init__(
        self,
        *,
        accounts: AccountRepository,
        sessions: SessionStore,
        password_hasher: PasswordHasher,
        remember_me_lifetime: timedelta = timedelta(days=14),
    ) -> None:
        self._accounts = accounts
        self._sessions = sessions
        self._password_hasher = password_hasher
        self._remember_me_lifetime = remember_me_lifetime
        # Unknown usernames still pay for one verification.
        self._decoy_hash = password_hasher.hash(secrets.token_urlsafe(16))

    def execute(
        self,
        username: str,
        password: str,
        *,
        remember_me: bool = False,
        current_session: SessionRecord | None = None,
    ) -> AuthResult:
        account = self._accounts.find_by_username(username)
        hashed = account.password_hash if account else self._decoy_hash
        password_valid = self._password_hasher.verify(password, hashed)

        if account is None or not password_valid:
            logger.info(f"auth.signin: rejected username={username}")
            raise InvalidCredentialsError()

        expires_at = None
        if remember_me:
            expires_at = datetime.now(UTC) + self._remember_me_lifetime

        session = promote_session(
            self._sessions, current_session, account=account, expires_at=expires_at
        )
        logger.info(f"auth.signin: ok account={account.id} remember_me={remember_me}")
        return AuthResult(account=account, session=session)
