"""
Service-level exceptions used across the auth subsystem.

These exceptions are **framework-agnostic**: they never depend on Flask or
HTTP. They are the stable contract between adapters (hasher, signer, stores)
and application services.

Translation to HTTP responses (RFC 7807) is handled by
``authcore/core/errors.py`` via ``BaseService.translate_exceptions()``.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str, *, column: str | None = None) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    PostgreSQL includes the constraint name in the message. SQLite only names
    the offending ``table.column``, so ``column`` is matched as a fallback.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.
    constraint_name : str
        The name of the database constraint to match (e.g., 'uq_users_email').
    column : str, optional
        Qualified column (e.g., 'users.email') reported by dialects that omit
        constraint names.

    Returns
    -------
    bool
        True if the IntegrityError matches the given constraint.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    if constraint_name.lower() in message:
        return True
    return column is not None and column.lower() in message


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - The API layer translates them to APIError via BaseService.
    """


# --------------------------------------------------------------------------- #
# Specific errors
# --------------------------------------------------------------------------- #


class AuthenticationError(ServiceError):
    """
    Single kind for every authentication rejection.

    Unknown email, wrong password, duplicate registration, unknown/revoked/
    expired refresh tokens and bad bearer tokens all raise this type. The
    message is uniform per flow so callers cannot tell the causes apart.
    """

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)
        self.message = message


class PersistenceError(ServiceError):
    """A backing store could not complete a read or write."""

    def __init__(self, message: str = "Storage operation failed") -> None:
        super().__init__(message)
        self.message = message


class HashingError(ServiceError):
    """The password hashing library failed to produce a hash."""


class SigningError(ServiceError):
    """Token signing is misconfigured (missing secret, bad lifetime)."""


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint is violated.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:  # pragma: no cover
        return f"Conflict on {self.entity}: {self.detail}"
