# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import Account, NewAccount, SessionRecord
from .exceptions import (
    AccessDeniedError,
    AuthError,
    IdentifierTakenError,
    InvalidCredentialsError,
    InvariantViolation,
    PasswordMismatchError,
    RedirectRequiredError,
    TermsNotAcceptedError,
    UnauthorizedError,
)
from .repositories import AccountRepository, PasswordHasher, SessionStore

__all__ = [
    "AccessDeniedError",
    "Account",
    "AccountRepository",
    "AuthError",
    "IdentifierTakenError",
    "InvalidCredentialsError",
    "InvariantViolation",
    "NewAccount",
    "PasswordHasher",
    "PasswordMismatchError",
    "RedirectRequiredError",
    "SessionRecord",
    "SessionStore",
    "TermsNotAcceptedError",
    "UnauthorizedError",
]
