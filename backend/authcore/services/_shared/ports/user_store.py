from __future__ import annotations

import threading
from dataclasses import dataclass, replace
from typing import Protocol

from authcore.services._shared.errors import ConflictError


@dataclass(frozen=True, slots=True)
class UserRecord:
    """
    Read-model of a stored user, including its password hash.

    Stays inside the auth trust boundary; services project it to a
    password-free DTO before returning anything to callers.

    :ivar id: Opaque unique key, rendered as a string.
    :ivar email: Email exactly as stored (case-sensitive).
    :ivar password_hash: Encoded hash, never the plaintext.
    :ivar name: Optional display name.
    :ivar role: Role tag (``"user"`` or ``"admin"``).
    """

    id: str
    email: str
    password_hash: str
    name: str | None = None
    role: str = "user"


class UserStore(Protocol):
    """Persistence port for the two user operations the auth flows need."""

    def find_by_email(self, email: str) -> UserRecord | None:
        """Exact-match lookup; ``None`` when no user has this email."""

    def create(
        self,
        *,
        email: str,
        password_hash: str,
        name: str | None = None,
        role: str = "user",
    ) -> UserRecord:
        """
        Persist a new user whose password is already hashed.

        :raises ConflictError: When the email is already taken (unique backstop).
        :raises PersistenceError: On any other storage failure.
        """


class InMemoryUserStore(UserStore):
    """
    Dict-backed user store for unit tests.

    Records every ``create`` call so tests can assert it was never invoked.
    """

    def __init__(self) -> None:
        self._by_email: dict[str, UserRecord] = {}
        self._seq = 0
        self._lock = threading.Lock()
        self.create_calls: list[str] = []

    def find_by_email(self, email: str) -> UserRecord | None:
        return self._by_email.get(email)

    def create(
        self,
        *,
        email: str,
        password_hash: str,
        name: str | None = None,
        role: str = "user",
    ) -> UserRecord:
        with self._lock:
            self.create_calls.append(email)
            if email in self._by_email:
                raise ConflictError("User", "email already exists")
            self._seq += 1
            record = UserRecord(
                id=str(self._seq),
                email=email,
                password_hash=password_hash,
                name=name,
                role=role,
            )
            self._by_email[email] = record
            return record

    def set_password_hash(self, email: str, password_hash: str) -> None:
        """Overwrite a stored hash (used to simulate corrupted rows)."""
        with self._lock:
            self._by_email[email] = replace(self._by_email[email], password_hash=password_hash)
