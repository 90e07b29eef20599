# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from .entities import Account, NewAccount, SessionRecord


class AccountRepository(Protocol):
    def find_by_username(self, username: str) -> Account | None: ...
    def find_by_id(self, account_id: int) -> Account | None: ...

    def add(self, account: NewAccount) -> Account:
        """Persist ``account``; raises ``IdentifierTakenError`` on a duplicate username."""
        ...


class SessionStore(Protocol):
    def get(self, token: str) -> SessionRecord | None: ...
    def issue(self, *, account_id: int | None, expires_at: datetime | None) -> SessionRecord: ...
    def destroy(self, token: str) -> None: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...
