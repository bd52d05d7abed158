"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import (
    AccessTokenSchema,
    LoginResponseSchema,
    LoginSchema,
    MeSchema,
    RefreshSchema,
    RegisterSchema,
    SessionUserSchema,
)
from .user import UserSchema

__all__ = [
    "AccessTokenSchema",
    "LoginResponseSchema",
    "LoginSchema",
    "MeSchema",
    "RefreshSchema",
    "RegisterSchema",
    "SessionUserSchema",
    "UserSchema",
]
