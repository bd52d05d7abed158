"""Authentication endpoints using the service layer."""

from __future__ import annotations

from flask import Blueprint, request

from authcore.api.deps import (
    build_auth_service,
    build_credential_verifier,
    client_ip,
    client_user_agent,
    current_claims,
    json_response,
    require_auth,
    timing,
)
from authcore.core.errors import Unauthorized
from authcore.schemas import (
    AccessTokenSchema,
    LoginResponseSchema,
    LoginSchema,
    MeSchema,
    RefreshSchema,
    RegisterSchema,
    UserSchema,
)
from authcore.services._shared.errors import ServiceError
from authcore.services.auth import LoginIn, RefreshIn, RegisterIn

bp = Blueprint("auth", __name__, url_prefix="/auth")

register_schema = RegisterSchema()
login_schema = LoginSchema()
refresh_schema = RefreshSchema()
user_schema = UserSchema()
login_response_schema = LoginResponseSchema()
access_token_schema = AccessTokenSchema()
me_schema = MeSchema()

INVALID_CREDENTIALS = "Invalid credentials"


@bp.post("/register")
@timing
def register():
    """Register a new user and return it without any password data."""

    payload = register_schema.load(request.get_json(silent=True) or {})
    service = build_auth_service()
    try:
        user = service.register(
            RegisterIn(email=payload["email"], password=payload["password"], name=payload["name"])
        )
    except ServiceError as exc:
        raise service.translate_exceptions(exc) from exc
    return json_response(user_schema.dump(user))


@bp.post("/login")
@timing
def login():
    """Verify credentials, then issue and persist a token pair."""

    data = login_schema.load(request.get_json(silent=True) or {})
    service = build_auth_service()
    try:
        user = build_credential_verifier().validate_credentials(
            LoginIn(email=data["email"], password=data["password"])
        )
        if user is None:
            raise Unauthorized(INVALID_CREDENTIALS)
        result = service.login(user, ip_address=client_ip(), user_agent=client_user_agent())
    except ServiceError as exc:
        raise service.translate_exceptions(exc) from exc
    return json_response(login_response_schema.dump(result))


@bp.post("/refresh")
@timing
def refresh():
    """Exchange a refresh token for a new access token (no rotation)."""

    data = refresh_schema.load(request.get_json(silent=True) or {})
    service = build_auth_service()
    try:
        result = service.refresh(RefreshIn(token=data["token"]))
    except ServiceError as exc:
        raise service.translate_exceptions(exc) from exc
    return json_response(access_token_schema.dump(result))


@bp.get("/me")
@require_auth
@timing
def me():
    """Return the identity carried by the bearer access token."""

    return json_response(me_schema.dump(current_claims()))
