# authcore/services/auth/tokens.py
from __future__ import annotations

from datetime import UTC, datetime, timedelta
from enum import Enum

from authcore.services._shared.errors import AuthenticationError
from authcore.services._shared.ports import RefreshTokenView, TokenProvider
from authcore.services.auth.dto import AccessClaims

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"

# Fixed lifetime, independent of the access-token setting
REFRESH_TOKEN_TTL = timedelta(days=7)


class RefreshTokenState(str, Enum):
    """Validity of a presented refresh token, evaluated fresh on every call."""

    UNKNOWN = "unknown"  # no stored record
    INVALID = "invalid"  # revoked, or past expires_at
    VALID = "valid"


def evaluate_refresh_token(view: RefreshTokenView | None, now: datetime) -> RefreshTokenState:
    """
    Classify a stored refresh token at instant ``now``.

    The window is inclusive: a token whose ``expires_at`` equals ``now`` is
    still valid; one second later it is not.
    """
    if view is None:
        return RefreshTokenState.UNKNOWN
    if view.revoked or view.expires_at < now:
        return RefreshTokenState.INVALID
    return RefreshTokenState.VALID


class AccessTokenValidator:
    """
    Validate bearer tokens presented to protected endpoints.

    Signature and expiry are checked by the token provider; this class adds
    the claim checks: ``type`` must be ``"access"`` and ``sub`` present. Any
    failure raises :class:`AuthenticationError` with one message.
    """

    MESSAGE = "Invalid or expired access token"

    def __init__(self, *, token_provider: TokenProvider) -> None:
        self.tokens = token_provider

    def validate(self, token: str) -> AccessClaims:
        if not token:
            raise AuthenticationError(self.MESSAGE)
        try:
            claims = self.tokens.decode(token)
        except AuthenticationError as exc:
            raise AuthenticationError(self.MESSAGE) from exc

        # refresh tokens are signed with the same key; reject them here
        if claims.get("type") != ACCESS_TOKEN_TYPE or not claims.get("sub"):
            raise AuthenticationError(self.MESSAGE)

        return AccessClaims(
            user_id=str(claims["sub"]),
            email=str(claims.get("email", "")),
            role=str(claims.get("role", "")),
            jti=claims.get("jti"),
            expires_at=datetime.fromtimestamp(int(claims["exp"]), tz=UTC),
        )
