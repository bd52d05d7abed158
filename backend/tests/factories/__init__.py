"""Factory Boy base wired to the transactional session of the test run."""

from __future__ import annotations

import factory


class SQLAlchemySession:
    """Hold the session the ``session`` fixture installs for each test."""

    _session = None

    @classmethod
    def set(cls, session):
        cls._session = session

    @classmethod
    def get(cls):
        """Return the registered SQLAlchemy session.

        Raises
        ------
        RuntimeError
            If a factory runs before the autouse fixture wired a session.
        """
        if cls._session is None:
            raise RuntimeError("Factories session not set. Did you pass the 'session' fixture?")
        return cls._session


class BaseFactory(factory.alchemy.SQLAlchemyModelFactory):
    """Flush-only persistence: rows stay inside the test's SAVEPOINT."""

    class Meta:
        abstract = True
        # callable, resolved per factory call (the session changes per test)
        sqlalchemy_session_factory = SQLAlchemySession.get
        sqlalchemy_session_persistence = "flush"
