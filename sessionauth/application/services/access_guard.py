# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Session-state access policy for protected operations.

The guard never looks at credentials. It only asks whether the current
session is bound to an account and, if not, picks the denial that fits the
kind of request: people following links get redirected, anything else gets a
bare 403.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from sessionauth.domain.users.entities import SessionRecord
from sessionauth.domain.users.exceptions import (
    AccessDeniedError,
    RedirectRequiredError,
    UnauthorizedError,
)


class RequestKind(str, Enum):
    NAVIGATIONAL = "navigational"
    NON_NAVIGATIONAL = "non_navigational"

    @classmethod
    def from_method(cls, method: str) -> RequestKind:
        if method.upper() in ("GET", "HEAD"):
            return cls.NAVIGATIONAL
        return cls.NON_NAVIGATIONAL


@dataclass(slots=True, frozen=True)
class GuardDecision:
    denial: AccessDeniedError | None = None

    @property
    def allowed(self) -> bool:
        return self.denial is None

    def enforce(self) -> None:
        if self.denial is not None:
            raise self.denial


ALLOW = GuardDecision()


class AccessGuard:
    def __init__(self, fallback: str = "/") -> None:
        self._fallback = fallback

    @property
    def fallback(self) -> str:
        return self._fallback

    def check(self, session: SessionRecord | None, kind: RequestKind) -> GuardDecision:
        if session is not None and session.is_authenticated:
            return ALLOW
        if kind is RequestKind.NAVIGATIONAL:
            return GuardDecision(denial=RedirectRequiredError(self._fallback))
        return GuardDecision(denial=UnauthorizedError())


__all__ = ["ALLOW", "AccessGuard", "GuardDecision", "RequestKind"]
