"""Refresh-token repository: insert, lookup by token value, revoke flag."""

from __future__ import annotations

from typing import Any

from sqlalchemy import Select, select, update
from sqlalchemy.orm import joinedload

from authcore.models.refresh_token import RefreshToken
from authcore.repositories.base import BaseRepository


class RefreshTokenRepository(BaseRepository[RefreshToken]):
    """Persistence-only repository for :class:`RefreshToken`.

    Validity (expiry, revocation) is decided by the auth service, not here.
    """

    model = RefreshToken

    def _default_eagerload(self, stmt: Select[Any]) -> Select[Any]:
        """Resolve the owning user in the same round trip."""
        return stmt.options(joinedload(RefreshToken.user))

    def get_by_token(self, token: str) -> RefreshToken | None:
        """Exact-match lookup by the signed token string.

        :param token: Refresh token as handed to the client.
        :returns: Row with ``user`` loaded, or ``None``.
        """
        return self._first(select(RefreshToken).where(RefreshToken.token == token))

    def mark_revoked(self, token: str) -> int:
        """Set ``revoked`` on the matching row; the flag is never cleared.

        :returns: Number of rows affected (0 or 1).
        """
        stmt = (
            update(RefreshToken)
            .where(RefreshToken.token == token)
            .values(revoked=True)
            .execution_options(synchronize_session="fetch")
        )
        return int(self.session.execute(stmt).rowcount or 0)
