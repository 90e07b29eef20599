# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .services.access_guard import AccessGuard, GuardDecision, RequestKind
from .services.password_hashing import BcryptPasswordHasher
from .use_cases.users.current_account import CurrentAccountUseCase
from .use_cases.users.session_promotion import AuthResult
from .use_cases.users.sign_in import SignInUseCase
from .use_cases.users.sign_out import SignOutUseCase
from .use_cases.users.sign_up import SignUpCommand, SignUpUseCase

__all__ = [
    "AccessGuard",
    "AuthResult",
    "BcryptPasswordHasher",
    "CurrentAccountUseCase",
    "GuardDecision",
    "RequestKind",
    "SignInUseCase",
    "SignOutUseCase",
    "SignUpCommand",
    "SignUpUseCase",
]
