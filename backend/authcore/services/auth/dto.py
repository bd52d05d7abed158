# authcore/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from authcore.services._shared.ports import UserRecord

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class RegisterIn:
    """
    Input DTO for registration.

    :param email: Email exactly as the user typed it (no case folding).
    :type email: str
    :param password: Raw password (hashed before it reaches the store).
    :type password: str
    :param name: Optional display name.
    :type name: str | None
    """

    email: str
    password: str
    name: str | None = None


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for credential verification.

    :param email: User email.
    :type email: str
    :param password: Raw password (to be verified).
    :type password: str
    """

    email: str
    password: str


@dataclass(frozen=True, slots=True)
class RefreshIn:
    """
    Input DTO for token refresh.

    :param token: Refresh token string returned by login.
    :type token: str
    """

    token: str


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class UserPublicOut:
    """
    Password-free user projection handed outside the auth boundary.

    :param id: Opaque user key.
    :param email: Email as stored.
    :param name: Display name, if any.
    :param role: Role tag.
    """

    id: str
    email: str
    name: str | None
    role: str

    @classmethod
    def from_record(cls, record: UserRecord) -> UserPublicOut:
        # explicit field copy; the hash is never carried over
        return cls(id=record.id, email=record.email, name=record.name, role=record.role)


@dataclass(frozen=True, slots=True)
class SessionUserOut:
    """User block embedded in a login response: ``{id, email, role}``."""

    id: str
    email: str
    role: str


@dataclass(frozen=True, slots=True)
class LoginOut:
    """
    Output DTO for login.

    :param access_token: Signed access JWT.
    :param refresh_token: Signed refresh JWT, already persisted.
    :param user: Identity the tokens were issued for.
    """

    access_token: str
    refresh_token: str
    user: SessionUserOut


@dataclass(frozen=True, slots=True)
class RefreshOut:
    """Output DTO for refresh: a new access token only."""

    access_token: str


@dataclass(frozen=True, slots=True)
class AccessClaims:
    """
    Claims read from a validated access token.

    :param user_id: ``sub`` claim.
    :param email: ``email`` claim.
    :param role: ``role`` claim.
    :param jti: Unique token id.
    :param expires_at: ``exp`` as aware UTC datetime.
    """

    user_id: str
    email: str
    role: str
    jti: str | None
    expires_at: datetime
