# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .users import Account, InvariantViolation, NewAccount, SessionRecord

__all__ = [
    "Account",
    "InvariantViolation",
    "NewAccount",
    "SessionRecord",
]
