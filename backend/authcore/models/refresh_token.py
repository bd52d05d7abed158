"""Persisted refresh token with issuance metadata."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from authcore.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .user import User


class RefreshToken(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    One row per successful login.

    Fields
    ------
    token : str
        Signed refresh token string; unique lookup key.
    user_id : int
        Owning user (back-reference for lookup, loaded eagerly as ``user``).
    ip_address, user_agent : str
        Opaque audit data captured at issuance, never interpreted.
    expires_at : datetime
        Absolute expiry; the token is invalid strictly after this instant.
    revoked : bool
        Starts ``False`` and may only ever become ``True``.

    Only ``revoked`` changes after insert; rows are never deleted here.
    """

    __tablename__ = "refresh_tokens"

    token: Mapped[str] = mapped_column(Text, nullable=False)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    ip_address: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    user_agent: Mapped[str] = mapped_column(Text, nullable=False, default="")
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    revoked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    user: Mapped[User] = relationship(back_populates="refresh_tokens", lazy="joined")

    __table_args__ = (
        UniqueConstraint("token", name="uq_refresh_tokens_token"),
        Index("ix_refresh_tokens_user_id", "user_id"),
    )
