# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from sessionauth.domain.users.entities import Account, SessionRecord
from sessionauth.domain.users.repositories import SessionStore
from sessionauth.shared.logging import logger


@dataclass(slots=True, frozen=True)
class AuthResult:
    account: Account
    session: SessionRecord


def promote_session(
    sessions: SessionStore,
    current: SessionRecord | None,
    *,
    account: Account,
    expires_at: datetime | None,
) -> SessionRecord:
    """Bind a fresh session to ``account``, retiring the presented one.

    A re-authentication from an already bound session overwrites the binding.
    """
    if current is not None:
        if current.is_authenticated:
            logger.info(
                f"auth.session: replacing binding account={current.account_id} -> {account.id}"
            )
        sessions.destroy(current.token)
    return sessions.issue(account_id=account.id, expires_at=expires_at)
