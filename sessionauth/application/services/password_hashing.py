"""Password hashing strategies."""

from __future__ import annotations

import bcrypt

from sessionauth.domain.users.repositories import PasswordHasher

DEFAULT_ROUNDS = 10
# bcrypt ignores (or, in newer releases, rejects) input past this many bytes
MAX_PASSWORD_BYTES = 72


class BcryptPasswordHasher(PasswordHasher):
    def __init__(self, rounds: int = DEFAULT_ROUNDS) -> None:
        if not 4 <= rounds <= 31:
            raise ValueError(f"bcrypt rounds must be between 4 and 31, got {rounds}")
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("ascii")

    def verify(self, password: str, hashed: str) -> bool:
        if not hashed:
            return False
        try:
            return bool(bcrypt.checkpw(password.encode("utf-8"), hashed.encode("ascii")))
        except ValueError:
            # Malformed hash or oversized input reads as a plain mismatch.
            return False
