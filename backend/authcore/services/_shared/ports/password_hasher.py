from __future__ import annotations

from typing import Protocol


class PasswordHasher(Protocol):
    """Port for one-way password hashing.

    Implementations salt every call, so two hashes of the same plaintext
    differ while both still verify.
    """

    def hash(self, plaintext: str) -> str:
        """Return an encoded salted hash. Raises ``HashingError`` on failure."""

    def verify(self, plaintext: str, hash_value: str) -> bool:
        """Constant-time check; ``False`` for any mismatch or malformed hash."""


class PlaintextPasswordHasher(PasswordHasher):
    """Reversible marker hasher for unit tests (never use outside tests).

    Each call embeds a counter so repeated hashes of one password differ,
    mirroring salt behaviour without paying for bcrypt rounds.
    """

    PREFIX = "plain$"

    def __init__(self) -> None:
        self._seq = 0
        self.hash_calls = 0
        self.verify_calls = 0

    def hash(self, plaintext: str) -> str:
        self._seq += 1
        self.hash_calls += 1
        return f"{self.PREFIX}{self._seq}${plaintext}"

    def verify(self, plaintext: str, hash_value: str) -> bool:
        self.verify_calls += 1
        if not hash_value or not hash_value.startswith(self.PREFIX):
            return False
        _, _, stored = hash_value[len(self.PREFIX) :].partition("$")
        return stored == plaintext
