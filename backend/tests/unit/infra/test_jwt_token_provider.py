# tests/unit/infra/test_jwt_token_provider.py
from __future__ import annotations

from datetime import timedelta

import jwt as pyjwt
import pytest

from authcore.core.config import DEV_JWT_SECRET
from authcore.infra.jwt.flask_jwt_token_provider import JWTTokenProvider, ensure_signing_config
from authcore.services._shared.errors import AuthenticationError, SigningError
from authcore.services.auth.tokens import REFRESH_TOKEN_TTL


@pytest.fixture()
def provider() -> JWTTokenProvider:
    return JWTTokenProvider()


def test_access_token_claims_and_configured_ttl(app, provider):
    token = provider.create_access_token(
        identity="7", additional_claims={"email": "a@x.com", "role": "user"}
    )

    claims = provider.decode(token)

    assert claims["sub"] == "7"
    assert claims["email"] == "a@x.com"
    assert claims["role"] == "user"
    assert claims["type"] == "access"
    assert claims["jti"]
    ttl = app.config["JWT_ACCESS_TOKEN_EXPIRES"]
    assert claims["exp"] - claims["iat"] == int(ttl.total_seconds())


def test_refresh_token_uses_fixed_seven_day_ttl(provider):
    token = provider.create_refresh_token(
        identity="7", additional_claims={"email": "a@x.com"}, expires_delta=REFRESH_TOKEN_TTL
    )

    claims = provider.decode(token)

    assert claims["type"] == "refresh"
    assert claims["email"] == "a@x.com"
    assert "role" not in claims
    assert claims["exp"] - claims["iat"] == 7 * 24 * 3600


def test_tokens_issued_back_to_back_differ(provider):
    first = provider.create_refresh_token(identity="7", expires_delta=REFRESH_TOKEN_TTL)
    second = provider.create_refresh_token(identity="7", expires_delta=REFRESH_TOKEN_TTL)

    assert first != second


def test_tokens_are_hs256(provider):
    token = provider.create_access_token(identity="7")

    assert pyjwt.get_unverified_header(token)["alg"] == "HS256"


def test_decode_rejects_foreign_signature(provider):
    forged = pyjwt.encode(
        {"sub": "7", "type": "access", "exp": 4102444800},
        "some-other-key-that-is-long-enough-for-hmac",
        algorithm="HS256",
    )

    with pytest.raises(AuthenticationError):
        provider.decode(forged)


def test_decode_rejects_expired_token(provider, freeze_time):
    with freeze_time("2026-01-01 00:00:00"):
        token = provider.create_access_token(identity="7")

    with freeze_time("2026-01-01 01:00:00"), pytest.raises(AuthenticationError):
        provider.decode(token)


def test_decode_rejects_garbage(provider):
    with pytest.raises(AuthenticationError):
        provider.decode("not.a.jwt")


# ------------------------- startup configuration -------------------------- #
def _config(**overrides):
    base = {
        "APP_ENV": "development",
        "JWT_SECRET_KEY": "a-long-enough-development-signing-key",
        "JWT_ALGORITHM": "HS256",
        "JWT_ACCESS_TOKEN_EXPIRES": timedelta(minutes=15),
    }
    base.update(overrides)
    return base


def test_valid_signing_config_passes():
    ensure_signing_config(_config())
    ensure_signing_config(_config(JWT_ACCESS_TOKEN_EXPIRES=60))


def test_placeholder_secret_allowed_outside_production():
    ensure_signing_config(_config(JWT_SECRET_KEY=DEV_JWT_SECRET))


@pytest.mark.parametrize(
    "overrides",
    [
        {"JWT_SECRET_KEY": None},
        {"JWT_SECRET_KEY": ""},
        {"JWT_SECRET_KEY": "   "},
        {"APP_ENV": "production", "JWT_SECRET_KEY": DEV_JWT_SECRET},
        {"JWT_ALGORITHM": "RS256"},
        {"JWT_ACCESS_TOKEN_EXPIRES": timedelta(0)},
        {"JWT_ACCESS_TOKEN_EXPIRES": timedelta(seconds=-5)},
        {"JWT_ACCESS_TOKEN_EXPIRES": False},
        {"JWT_ACCESS_TOKEN_EXPIRES": None},
    ],
)
def test_unusable_signing_config_raises(overrides):
    with pytest.raises(SigningError):
        ensure_signing_config(_config(**overrides))
