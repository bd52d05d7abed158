# authcore/infra/jwt/flask_jwt_token_provider.py
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, cast

import jwt as pyjwt
from flask_jwt_extended import create_access_token as _create_access
from flask_jwt_extended import create_refresh_token as _create_refresh
from flask_jwt_extended import decode_token as _decode
from flask_jwt_extended.exceptions import JWTExtendedException

from authcore.core.config import DEV_JWT_SECRET
from authcore.services._shared.errors import AuthenticationError, SigningError
from authcore.services._shared.ports import TokenProvider

HMAC_ALGORITHMS = frozenset({"HS256", "HS384", "HS512"})


def ensure_signing_config(config: Mapping[str, Any]) -> None:
    """
    Validate JWT signing settings before the app starts serving.

    :param config: Flask config (or any mapping with the same keys).
    :raises SigningError: If the secret is missing or blank, the development
        placeholder is used in production, the algorithm is not HMAC, or the
        access-token lifetime is not a positive duration.
    """
    secret = config.get("JWT_SECRET_KEY")
    if not secret or not str(secret).strip():
        raise SigningError("JWT_SECRET_KEY is not configured")
    if config.get("APP_ENV") == "production" and secret == DEV_JWT_SECRET:
        raise SigningError("JWT_SECRET_KEY still holds the development placeholder")

    algorithm = config.get("JWT_ALGORITHM", "HS256")
    if algorithm not in HMAC_ALGORITHMS:
        raise SigningError(f"Unsupported JWT_ALGORITHM: {algorithm!r}")

    ttl = config.get("JWT_ACCESS_TOKEN_EXPIRES")
    if isinstance(ttl, bool) or not isinstance(ttl, timedelta | int):
        raise SigningError("JWT_ACCESS_TOKEN_EXPIRES must be a duration")
    seconds = ttl.total_seconds() if isinstance(ttl, timedelta) else ttl
    if seconds <= 0:
        raise SigningError("JWT_ACCESS_TOKEN_EXPIRES must be positive")


@dataclass(slots=True)
class JWTTokenProvider(TokenProvider):
    """
    Adapter for Flask-JWT-Extended.

    Signs with the process-wide ``JWT_SECRET_KEY``; every token gets a random
    ``jti`` so two tokens issued in the same second never collide.

    .. note::
       Requires an active Flask app context with proper JWT settings.
    """

    def create_access_token(
        self,
        *,
        identity: str,
        additional_claims: dict[str, Any] | None = None,
        expires_delta: timedelta | None = None,
    ) -> str:
        # expires_delta=None -> JWT_ACCESS_TOKEN_EXPIRES from config
        return cast(
            str,
            _create_access(
                identity=identity,
                additional_claims=additional_claims or {},
                expires_delta=expires_delta,
            ),
        )

    def create_refresh_token(
        self,
        *,
        identity: str,
        additional_claims: dict[str, Any] | None = None,
        expires_delta: timedelta | None = None,
    ) -> str:
        return cast(
            str,
            _create_refresh(
                identity=identity,
                additional_claims=additional_claims or {},
                expires_delta=expires_delta,
            ),
        )

    def decode(self, token: str) -> dict[str, Any]:
        try:
            return cast(dict[str, Any], _decode(token))
        except (pyjwt.PyJWTError, JWTExtendedException) as exc:
            raise AuthenticationError("Invalid or expired token") from exc
