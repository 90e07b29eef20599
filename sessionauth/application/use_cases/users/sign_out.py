"""Use-case for ending an authenticated session."""

from __future__ import annotations

from sessionauth.domain.users.repositories import SessionStore
from sessionauth.shared.logging import logger


class SignOutUseCase:
    def __init__(self, *, sessions: SessionStore) -> None:
        self._sessions = sessions

    def execute(self, token: str) -> None:
        if token:
            self._sessions.destroy(token)
            logger.info("auth.signout: session destroyed")
