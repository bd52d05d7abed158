from __future__ import annotations

import threading
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Protocol

from authcore.services._shared.errors import PersistenceError


@dataclass(frozen=True, slots=True)
class TokenOwner:
    """
    Back-reference to the user a refresh token was issued to.

    :ivar id: Opaque user key.
    :ivar email: User email as stored.
    :ivar role: Role tag carried into new access tokens.
    """

    id: str
    email: str
    role: str


@dataclass(frozen=True, slots=True)
class RefreshTokenView:
    """
    Read-model for a persisted refresh token.

    :ivar token: Signed token string (lookup key).
    :ivar user: Owning user, resolved together with the record.
    :ivar ip_address: Client address captured at issuance (audit only).
    :ivar user_agent: Client agent captured at issuance (audit only).
    :ivar expires_at: Absolute expiry (aware UTC).
    :ivar revoked: Whether the token has been revoked.
    """

    token: str
    user: TokenOwner
    ip_address: str
    user_agent: str
    expires_at: datetime
    revoked: bool = False


class RefreshTokenStore(Protocol):
    """
    Durable store of issued refresh tokens.

    ``persist`` MUST be atomic: either the full record is written or a
    ``PersistenceError`` is raised and nothing is stored.
    """

    def persist(
        self,
        *,
        user_id: str,
        token: str,
        ip_address: str,
        user_agent: str,
        expires_at: datetime,
    ) -> RefreshTokenView:
        """Write a new record with ``revoked = False`` and return its view."""

    def find_by_token(self, token: str) -> RefreshTokenView | None:
        """Exact-match lookup, owner resolved in the same call."""

    def mark_revoked(self, token: str) -> bool:
        """Flip ``revoked`` to ``True``. :returns: True if the token existed."""


class InMemoryRefreshTokenStore(RefreshTokenStore):
    """
    In-memory refresh token store for unit tests.

    Owners must be registered with :meth:`add_owner` before ``persist``; an
    unknown owner behaves like a failed foreign key. Setting ``fail_writes``
    simulates an unavailable backend.

    .. note::
       Uses a threading lock so concurrent tests see atomic writes.
    """

    def __init__(self) -> None:
        self._by_token: dict[str, RefreshTokenView] = {}
        self._owners: dict[str, TokenOwner] = {}
        self._lock = threading.Lock()
        self.fail_writes = False

    def add_owner(self, owner: TokenOwner) -> None:
        self._owners[owner.id] = owner

    def persist(
        self,
        *,
        user_id: str,
        token: str,
        ip_address: str,
        user_agent: str,
        expires_at: datetime,
    ) -> RefreshTokenView:
        with self._lock:
            if self.fail_writes:
                raise PersistenceError("Refresh token store unavailable")
            owner = self._owners.get(user_id)
            if owner is None or token in self._by_token:
                raise PersistenceError("Could not persist refresh token")
            view = RefreshTokenView(
                token=token,
                user=owner,
                ip_address=ip_address,
                user_agent=user_agent,
                expires_at=expires_at,
                revoked=False,
            )
            self._by_token[token] = view
            return view

    def find_by_token(self, token: str) -> RefreshTokenView | None:
        return self._by_token.get(token)

    def mark_revoked(self, token: str) -> bool:
        with self._lock:
            view = self._by_token.get(token)
            if view is None:
                return False
            self._by_token[token] = replace(view, revoked=True)
            return True

    def __len__(self) -> int:
        return len(self._by_token)
