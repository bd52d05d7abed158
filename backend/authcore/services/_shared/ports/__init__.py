"""
authcore.services._shared.ports
===============================

*Ports* (hexagonal interfaces) that the auth services depend on.

Modules
-------
- :mod:`password_hasher`:
    :class:`~.PasswordHasher`, salted one-way hashing.

- :mod:`token_provider`:
    :class:`~.TokenProvider`, JWT creation and decoding.

- :mod:`refresh_token_store`:
    :class:`~.RefreshTokenStore` and :class:`~.RefreshTokenView`, durable
    storage of issued refresh tokens.

- :mod:`user_store`:
    :class:`~.UserStore` and :class:`~.UserRecord`, the user lookups and
    inserts the auth flows consume.

Design Notes
------------
Concrete adapters (bcrypt, flask-jwt-extended, SQLAlchemy) live under
``authcore.infra``. Each port ships an in-memory double for unit tests.
"""

from __future__ import annotations

from .password_hasher import PasswordHasher, PlaintextPasswordHasher
from .refresh_token_store import (
    InMemoryRefreshTokenStore,
    RefreshTokenStore,
    RefreshTokenView,
    TokenOwner,
)
from .token_provider import StubTokenProvider, TokenProvider
from .user_store import InMemoryUserStore, UserRecord, UserStore

__all__ = [
    "PasswordHasher",
    "PlaintextPasswordHasher",
    "TokenProvider",
    "StubTokenProvider",
    "RefreshTokenStore",
    "RefreshTokenView",
    "TokenOwner",
    "InMemoryRefreshTokenStore",
    "UserStore",
    "UserRecord",
    "InMemoryUserStore",
]
