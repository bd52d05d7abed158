"""SQLAlchemy-backed user store."""

from __future__ import annotations

import logging
from collections.abc import Callable

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from authcore.models.user import User
from authcore.repositories import UserRepository
from authcore.services._shared.errors import ConflictError, PersistenceError, violates
from authcore.services._shared.ports import UserRecord, UserStore
from authcore.uow import SQLAlchemyUnitOfWork

log = logging.getLogger(__name__)


def to_user_record(user: User) -> UserRecord:
    """Project an ORM user to the store read-model (hash included)."""
    return UserRecord(
        id=str(user.id),
        email=user.email,
        password_hash=user.password_hash,
        name=user.name,
        role=user.role,
    )


class SQLAlchemyUserStore(UserStore):
    """
    User store over the ``users`` table.

    Reads go through the session directly; ``create`` runs in its own
    read-write unit of work and commits before returning.
    """

    def __init__(
        self,
        *,
        session: Session | None = None,
        uow_factory: Callable[[], SQLAlchemyUnitOfWork] | None = None,
    ) -> None:
        self._session = session
        self._uow_factory = uow_factory or (lambda: SQLAlchemyUnitOfWork(self._session))

    def find_by_email(self, email: str) -> UserRecord | None:
        try:
            user = UserRepository(session=self._session).get_by_email(email)
        except SQLAlchemyError as exc:
            log.error("User lookup failed", exc_info=True)
            raise PersistenceError("User lookup failed") from exc
        return to_user_record(user) if user is not None else None

    def create(
        self,
        *,
        email: str,
        password_hash: str,
        name: str | None = None,
        role: str = "user",
    ) -> UserRecord:
        try:
            with self._uow_factory() as uow:
                user = User(email=email, password_hash=password_hash, name=name, role=role)
                uow.users.add(user)
                record = to_user_record(user)
        except IntegrityError as exc:
            if violates(exc, "uq_users_email", column="users.email"):
                raise ConflictError("User", "email already exists") from exc
            log.error("User insert violated an unexpected constraint", exc_info=True)
            raise PersistenceError("User could not be created") from exc
        except SQLAlchemyError as exc:
            log.error("User insert failed", exc_info=True)
            raise PersistenceError("User could not be created") from exc
        return record
