"""Authentication services: credential checks, token validation, auth flows."""

from authcore.services.auth.credentials import CredentialVerifier
from authcore.services.auth.dto import (
    AccessClaims,
    LoginIn,
    LoginOut,
    RefreshIn,
    RefreshOut,
    RegisterIn,
    SessionUserOut,
    UserPublicOut,
)
from authcore.services.auth.service import AuthService
from authcore.services.auth.tokens import (
    REFRESH_TOKEN_TTL,
    AccessTokenValidator,
    RefreshTokenState,
    evaluate_refresh_token,
)

__all__ = [
    "AccessClaims",
    "AccessTokenValidator",
    "AuthService",
    "CredentialVerifier",
    "LoginIn",
    "LoginOut",
    "REFRESH_TOKEN_TTL",
    "RefreshIn",
    "RefreshOut",
    "RefreshTokenState",
    "RegisterIn",
    "SessionUserOut",
    "UserPublicOut",
    "evaluate_refresh_token",
]
