"""bcrypt adapter for the password hashing port."""

from __future__ import annotations

import logging

import bcrypt

from authcore.services._shared.errors import HashingError
from authcore.services._shared.ports import PasswordHasher

log = logging.getLogger(__name__)

# Cost factor shared with hashes already stored in the users table
DEFAULT_ROUNDS = 10

# bcrypt reads at most this many bytes of a password
MAX_PASSWORD_BYTES = 72


class BcryptPasswordHasher(PasswordHasher):
    """
    Salted bcrypt hashing with constant-time verification.

    ``bcrypt.gensalt`` draws a fresh salt on every call, so hashing the same
    plaintext twice yields two different strings that both verify.
    """

    def __init__(self, rounds: int = DEFAULT_ROUNDS) -> None:
        self.rounds = rounds

    def hash(self, plaintext: str) -> str:
        try:
            digest = bcrypt.hashpw(plaintext.encode("utf-8"), bcrypt.gensalt(rounds=self.rounds))
        except (ValueError, TypeError) as exc:
            raise HashingError("Password could not be hashed") from exc
        return digest.decode("utf-8")

    def verify(self, plaintext: str, hash_value: str) -> bool:
        if not plaintext or not hash_value:
            return False
        candidate = plaintext.encode("utf-8")
        if len(candidate) > MAX_PASSWORD_BYTES:
            # never let a longer password match on its 72-byte prefix
            return False
        try:
            return bcrypt.checkpw(candidate, hash_value.encode("utf-8"))
        except (ValueError, TypeError):
            # malformed stored hash: same answer as a mismatch
            log.warning("bcrypt rejected a stored hash")
            return False
