"""Factory Boy definition for :class:`authcore.models.refresh_token.RefreshToken`."""

from __future__ import annotations

from datetime import UTC, datetime

import factory

from authcore.models.refresh_token import RefreshToken
from authcore.services.auth.tokens import REFRESH_TOKEN_TTL
from tests.factories import BaseFactory
from tests.factories.user import UserFactory


class RefreshTokenFactory(BaseFactory):
    """Build persisted refresh tokens owned by a fresh user by default."""

    class Meta:
        model = RefreshToken

    id = None
    token = factory.Sequence(lambda n: f"refresh-token-{n}")
    user = factory.SubFactory(UserFactory)
    ip_address = factory.Faker("ipv4")
    user_agent = factory.Faker("user_agent")
    expires_at = factory.LazyFunction(lambda: datetime.now(UTC) + REFRESH_TOKEN_TTL)
    revoked = False
