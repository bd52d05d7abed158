"""User model owned by the user store and referenced by refresh tokens."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from authcore.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .refresh_token import RefreshToken


class UserRole(str, Enum):
    """Enumerated role tag embedded in access tokens."""

    USER = "user"
    ADMIN = "admin"


class User(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Login identity.

    Fields
    ------
    email : str
        Login email, unique, stored and matched exactly as given.
    password_hash : str
        bcrypt hash produced by the password hasher. The plaintext is never
        stored and ``password`` cannot be read back.
    name : str | None
        Optional display name captured at registration.
    role : str
        One of :class:`UserRole` (``"user"`` by default).
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(254), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(128), nullable=False)
    name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default=UserRole.USER.value)

    refresh_tokens: Mapped[list[RefreshToken]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    # The unique constraint is the backstop for concurrent registrations
    __table_args__ = (UniqueConstraint("email", name="uq_users_email"),)

    @property
    def password(self) -> Any:  # pragma: no cover - explicit write-only contract
        """
        Disallow reading passwords.

        :raises AttributeError: Always; only ``password_hash`` is stored.
        """
        raise AttributeError("Password is not readable.")

    @validates("email")
    def _validate_email(self, key: str, value: str) -> str:
        """
        Reject empty or obviously malformed emails without normalizing them.

        :raises ValueError: If email is missing or lacks an ``@``.
        """
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Email is required.")
        if "@" not in value:
            raise ValueError("Email format looks invalid.")
        return value

    @validates("role")
    def _validate_role(self, key: str, value: str | UserRole) -> str:
        """
        Coerce the role to its string tag.

        :raises ValueError: If the role is not a known :class:`UserRole`.
        """
        return UserRole(value).value
