# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from sessionauth.shared.errors.base import DomainError


class InvariantViolation(ValueError):
    def __init__(self, message: str, *, field: str | None = None):
        super().__init__(message)
        self.field = field

    def __str__(self) -> str:
        if self.field:
            return f"{self.field}: {super().__str__()}"
        return super().__str__()


class AuthError(DomainError):
    """Failure recovered at the request boundary and shown on the form."""

    message = "Authentication failed"

    def user_message(self) -> str:
        return self.message


class InvalidCredentialsError(AuthError):
    # Shared by "unknown username" and "wrong password" on purpose.
    code = "invalid_credentials"
    message = "Wrong username or password"


class PasswordMismatchError(AuthError):
    code = "password_mismatch"
    message = "passwords do not match"


class TermsNotAcceptedError(AuthError):
    code = "terms_not_accepted"
    message = "You haven't accepted terms of service"


class IdentifierTakenError(AuthError):
    code = "identifier_taken"

    def __init__(self, username: str) -> None:
        super().__init__(context={"username": username})

    def user_message(self) -> str:
        username = (self.context or {}).get("username", "")
        return f"{username}: username already used"


class AccessDeniedError(DomainError):
    pass


class UnauthorizedError(AccessDeniedError):
    code = "unauthorized"
    status = HTTPStatus.FORBIDDEN


class RedirectRequiredError(AccessDeniedError):
    code = "redirect_required"
    status = HTTPStatus.FOUND

    def __init__(self, location: str) -> None:
        super().__init__(context={"location": location})

    @property
    def location(self) -> str:
        return str((self.context or {}).get("location", "/"))
