"""SQLAlchemy-backed refresh token store."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from authcore.models.refresh_token import RefreshToken
from authcore.repositories import RefreshTokenRepository
from authcore.services._shared.errors import PersistenceError
from authcore.services._shared.ports import RefreshTokenStore, RefreshTokenView, TokenOwner
from authcore.uow import SQLAlchemyUnitOfWork

log = logging.getLogger(__name__)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes (SQLite drops tzinfo on read)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def to_view(row: RefreshToken) -> RefreshTokenView:
    user = row.user
    return RefreshTokenView(
        token=row.token,
        user=TokenOwner(id=str(user.id), email=user.email, role=user.role),
        ip_address=row.ip_address,
        user_agent=row.user_agent,
        expires_at=as_utc(row.expires_at),
        revoked=bool(row.revoked),
    )


class SQLAlchemyRefreshTokenStore(RefreshTokenStore):
    """
    Refresh token store over the ``refresh_tokens`` table.

    ``persist`` is all-or-nothing: the row and its metadata are written in a
    single unit of work, and any failure rolls back and surfaces as
    :class:`PersistenceError`.
    """

    def __init__(
        self,
        *,
        session: Session | None = None,
        uow_factory: Callable[[], SQLAlchemyUnitOfWork] | None = None,
    ) -> None:
        self._session = session
        self._uow_factory = uow_factory or (lambda: SQLAlchemyUnitOfWork(self._session))

    def persist(
        self,
        *,
        user_id: str,
        token: str,
        ip_address: str,
        user_agent: str,
        expires_at: datetime,
    ) -> RefreshTokenView:
        try:
            owner_pk = int(user_id)
        except ValueError as exc:
            raise PersistenceError("Unknown token owner") from exc

        try:
            with self._uow_factory() as uow:
                owner = uow.users.get(owner_pk)
                if owner is None:
                    raise PersistenceError("Unknown token owner")
                row = RefreshToken(
                    token=token,
                    user=owner,
                    ip_address=ip_address,
                    user_agent=user_agent,
                    expires_at=expires_at,
                    revoked=False,
                )
                uow.refresh_tokens.add(row)
                view = to_view(row)
        except SQLAlchemyError as exc:
            log.error("Refresh token insert failed", exc_info=True)
            raise PersistenceError("Refresh token could not be stored") from exc
        return view

    def find_by_token(self, token: str) -> RefreshTokenView | None:
        try:
            row = RefreshTokenRepository(session=self._session).get_by_token(token)
        except SQLAlchemyError as exc:
            log.error("Refresh token lookup failed", exc_info=True)
            raise PersistenceError("Refresh token lookup failed") from exc
        return to_view(row) if row is not None else None

    def mark_revoked(self, token: str) -> bool:
        try:
            with self._uow_factory() as uow:
                affected = uow.refresh_tokens.mark_revoked(token)
        except SQLAlchemyError as exc:
            log.error("Refresh token revoke failed", exc_info=True)
            raise PersistenceError("Refresh token could not be revoked") from exc
        return affected > 0
