# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass

from sessionauth.application.use_cases.users.session_promotion import AuthResult, promote_session
from sessionauth.domain.users.entities import NewAccount, SessionRecord
from sessionauth.domain.users.exceptions import (
    IdentifierTakenError,
    PasswordMismatchError,
    TermsNotAcceptedError,
)
from sessionauth.domain.users.repositories import AccountRepository, PasswordHasher, SessionStore
from sessionauth.shared.logging import logger


@dataclass(slots=True, frozen=True)
class SignUpCommand:
    username: str
    first_name: str
    last_name: str
    password: str
    password_confirmation: str
    avatar: str | None
    accepted_terms: bool


class SignUpUseCase:
    def __init__(
        self,
        *,
        accounts: AccountRepository,
        sessions: SessionStore,
        password_hasher: PasswordHasher,
    ) -> None:
        self._accounts = accounts
        self._sessions = sessions
        self._password_hasher = password_hasher

    def execute(
        self, command: SignUpCommand, *, current_session: SessionRecord | None = None
    ) -> AuthResult:
        if command.password != command.password_confirmation:
            raise PasswordMismatchError()

        if not command.accepted_terms:
            raise TermsNotAcceptedError()

        # Fast path only; the store's unique constraint settles races.
        if self._accounts.find_by_username(command.username) is not None:
            logger.info(f"auth.signup: username taken username={command.username}")
            raise IdentifierTakenError(command.username)

        hashed = self._password_hasher.hash(command.password)
        account = self._accounts.add(
            NewAccount(
                username=command.username,
                first_name=command.first_name,
                last_name=command.last_name,
                password_hash=hashed,
                avatar=command.avatar,
            )
        )

        session = promote_session(
            self._sessions, current_session, account=account, expires_at=None
        )
        logger.info(f"auth.signup: ok account={account.id}")
        return AuthResult(account=account, session=session)
