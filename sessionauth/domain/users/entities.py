# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from .exceptions import InvariantViolation


@dataclass(slots=True, frozen=True)
class NewAccount:
    """Fields supplied at sign-up; ``password_hash`` is already hashed."""

    username: str
    first_name: str
    last_name: str
    password_hash: str
    avatar: str | None = None

    def __post_init__(self) -> None:
        if not self.username:
            raise InvariantViolation("username is required", field="username")
        if not self.password_hash:
            raise InvariantViolation("password hash is required", field="password_hash")


@dataclass(slots=True, frozen=True)
class Account:

    id: int
    username: str
    first_name: str
    last_name: str
    password_hash: str
    avatar: str | None
    created_at: datetime

    @property
    def display_name(self) -> str:
        full = f"{self.first_name} {self.last_name}".strip()
        return full or self.username


@dataclass(slots=True, frozen=True)
class SessionRecord:
    """Server-held session state keyed by the token the client presents.

    ``account_id`` is ``None`` for anonymous sessions. ``expires_at`` is
    ``None`` for sessions that end when the browser closes; those are bounded
    server-side by a TTL counted from ``created_at``.
    """

    token: str
    account_id: int | None
    expires_at: datetime | None
    created_at: datetime

    def __post_init__(self) -> None:
        if not self.token:
            raise InvariantViolation("session token is required", field="token")

    @property
    def is_authenticated(self) -> bool:
        return self.account_id is not None

    @property
    def is_persistent(self) -> bool:
        return self.expires_at is not None

    def is_expired(self, now: datetime, browser_ttl: timedelta) -> bool:
        if self.expires_at is not None:
            return self.expires_at <= now
        return self.created_at + browser_ttl <= now
