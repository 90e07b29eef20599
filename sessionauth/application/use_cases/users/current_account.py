"""Use-case for resolving the account bound to the current session."""

from __future__ import annotations

from sessionauth.domain.users.entities import Account, SessionRecord
from sessionauth.domain.users.repositories import AccountRepository


class CurrentAccountUseCase:
    def __init__(self, *, accounts: AccountRepository) -> None:
        self._accounts = accounts

    def execute(self, session: SessionRecord | None) -> Account | None:
        if session is None or session.account_id is None:
            return None
        return self._accounts.find_by_id(session.account_id)
