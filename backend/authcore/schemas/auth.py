"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import Schema, ValidationError, fields, validate

# bcrypt only reads the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def _fits_bcrypt(value: str) -> None:
    if len(value.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValidationError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes.")


class RegisterSchema(Schema):
    """Input payload for account registration."""

    name = fields.String(load_default=None, validate=validate.Length(max=100))
    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(
        required=True,
        validate=[validate.Length(min=6, max=128), _fits_bcrypt],
    )


class LoginSchema(Schema):
    """Input payload for authenticating a user.

    The email is a plain string and the password has no minimum length: a
    malformed email or a short password is rejected as bad credentials, not
    as a validation error.
    """

    email = fields.String(required=True, validate=validate.Length(min=1, max=254))
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))


class RefreshSchema(Schema):
    """Input payload carrying a refresh token."""

    token = fields.String(required=True, validate=validate.Length(min=1))


class SessionUserSchema(Schema):
    """User block embedded in the login response."""

    id = fields.String(required=True)
    email = fields.String(required=True)
    role = fields.String(required=True)


class LoginResponseSchema(Schema):
    """Response payload for a successful login."""

    access_token = fields.String(required=True, data_key="accessToken")
    refresh_token = fields.String(required=True, data_key="refreshToken")
    user = fields.Nested(SessionUserSchema, required=True)


class AccessTokenSchema(Schema):
    """Response payload containing a new access token."""

    access_token = fields.String(required=True, data_key="accessToken")


class MeSchema(Schema):
    """Identity details read from the caller's access token."""

    id = fields.String(required=True, attribute="user_id")
    email = fields.String(required=True)
    role = fields.String(required=True)
