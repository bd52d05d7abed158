"""Generic repository base for SQLAlchemy 2.x.

Repositories stay persistence-only:

- They never open, commit or roll back transactions; the Unit of Work owns
  the transaction boundary.
- They never implement auth rules (validity windows, uniqueness policy).
- Eager loading is opt-in via ``_default_eagerload`` to avoid N+1 queries.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar, cast

from sqlalchemy import Select, select
from sqlalchemy.orm import InstrumentedAttribute, Session

from authcore.core.extensions import db

E = TypeVar("E")  # SQLAlchemy mapped entity type


class BaseRepository(Generic[E]):
    """Persistence-only repository for a single aggregate.

    Subclasses MUST define ``model`` and MAY override ``_default_eagerload``.
    """

    #: SQLAlchemy mapped model (must be set by subclasses)
    model: type[E]

    def __init__(self, session: Session | None = None) -> None:
        """Initialise the repository with an optional SQLAlchemy session.

        When no explicit session is provided the repository falls back to the
        Flask-scoped session exposed by ``authcore.core.extensions``.

        :param session: Session shared across the Unit of Work scope.
        :type session: :class:`sqlalchemy.orm.Session` | None
        """
        self._session: Session | None = session

    @property
    def session(self) -> Session:
        """Return the injected session, or the Flask-scoped one."""
        if self._session is not None:
            return self._session
        return cast(Session, db.session)

    def _default_eagerload(self, stmt: Select[Any]) -> Select[Any]:
        """Attach eager-loading options to lookups (no-op by default)."""
        return stmt

    def _pk_attr(self) -> InstrumentedAttribute[Any] | None:
        """Return ``model.id`` when the model exposes one."""
        return getattr(self.model, "id", None)

    def add(self, instance: E) -> E:
        """Stage a new entity and flush to materialize its primary key.

        :param instance: New entity instance.
        :returns: The same instance after ``flush()``.
        """
        self.session.add(instance)
        self.flush()
        return instance

    def get(self, entity_id: Any) -> E | None:
        """Retrieve a single entity by primary key.

        :raises RuntimeError: If no PK attribute can be detected.
        """
        pk_attr = self._pk_attr()
        if pk_attr is None:
            raise RuntimeError("BaseRepository.get requires a detectable PK attribute.")
        stmt = self._default_eagerload(select(self.model).where(pk_attr == entity_id))
        return cast(E | None, self.session.execute(stmt).scalars().first())

    def _first(self, stmt: Select[Any]) -> E | None:
        """Execute ``stmt`` with eager options and return the first entity."""
        stmt = self._default_eagerload(stmt)
        return cast(E | None, self.session.execute(stmt).unique().scalars().first())

    def flush(self) -> None:
        """Flush pending changes to the database without committing."""
        self.session.flush()
