"""Shared API helpers: responses, timing, auth guard and service wiring."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar, cast

from flask import Response, current_app, g, jsonify, request

from authcore.core.errors import Unauthorized
from authcore.infra.jwt.flask_jwt_token_provider import JWTTokenProvider
from authcore.infra.security.bcrypt_hasher import BcryptPasswordHasher
from authcore.infra.sqlalchemy.refresh_token_store import SQLAlchemyRefreshTokenStore
from authcore.infra.sqlalchemy.user_store import SQLAlchemyUserStore
from authcore.services._shared.errors import AuthenticationError
from authcore.services.auth import (
    AccessClaims,
    AccessTokenValidator,
    AuthService,
    CredentialVerifier,
)

F = TypeVar("F", bound=Callable[..., Any])

_EXT_KEY = "authcore.auth"


def _components() -> dict[str, Any]:
    """Return the per-app auth components, building them on first use.

    Stores resolve the Flask-scoped session at call time, so one set of
    components serves every request of the app.
    """

    components = current_app.extensions.get(_EXT_KEY)
    if components is None:
        users = SQLAlchemyUserStore()
        hasher = BcryptPasswordHasher(rounds=int(current_app.config.get("BCRYPT_ROUNDS", 10)))
        tokens = JWTTokenProvider()
        components = {
            "verifier": CredentialVerifier(users=users, hasher=hasher),
            "service": AuthService(
                users=users,
                hasher=hasher,
                token_provider=tokens,
                refresh_store=SQLAlchemyRefreshTokenStore(),
            ),
            "validator": AccessTokenValidator(token_provider=tokens),
        }
        current_app.extensions[_EXT_KEY] = components
    return cast(dict[str, Any], components)


def build_auth_service() -> AuthService:
    """Return the :class:`AuthService` wired with the production adapters."""

    return cast(AuthService, _components()["service"])


def build_credential_verifier() -> CredentialVerifier:
    """Return the bcrypt/SQLAlchemy backed :class:`CredentialVerifier`."""

    return cast(CredentialVerifier, _components()["verifier"])


def build_access_token_validator() -> AccessTokenValidator:
    """Return the validator used by :func:`require_auth`."""

    return cast(AccessTokenValidator, _components()["validator"])


def _bearer_token() -> str:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return ""
    return token.strip()


def current_claims() -> AccessClaims:
    """Return the claims stored by :func:`require_auth` for this request."""

    return cast(AccessClaims, g.access_claims)


def require_auth(func: F) -> F:
    """Ensure the request carries a valid bearer access token."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        try:
            g.access_claims = build_access_token_validator().validate(_bearer_token())
        except AuthenticationError as exc:
            raise Unauthorized(exc.message) from exc
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def client_ip() -> str:
    """Client address as seen after ProxyFix (``"unknown"`` when absent)."""

    return request.remote_addr or "unknown"


def client_user_agent() -> str:
    return request.headers.get("User-Agent", "")


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
