"""Liveness probe reporting database reachability and token lifetimes."""

from __future__ import annotations

import logging
from datetime import timedelta

from flask import Blueprint, current_app
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from authcore.api.deps import json_response, timing
from authcore.core.extensions import db
from authcore.services.auth.tokens import REFRESH_TOKEN_TTL

log = logging.getLogger(__name__)

bp = Blueprint("health", __name__)

# Cheapest round trip that proves the user and token stores are reachable
PROBE_QUERY = "SELECT 1"


def _database_status() -> str:
    try:
        db.session.execute(text(PROBE_QUERY))
    except SQLAlchemyError:
        log.error("Health probe could not reach the database", exc_info=True)
        return "fail"
    return "ok"


@bp.get("/health")
@timing
def healthcheck():
    """Report ``ok`` (200) or ``degraded`` (503) with the signer's lifetimes."""

    database = _database_status()
    access_ttl = current_app.config["JWT_ACCESS_TOKEN_EXPIRES"]
    if isinstance(access_ttl, timedelta):
        access_ttl = access_ttl.total_seconds()
    payload = {
        "status": "ok" if database == "ok" else "degraded",
        "database": database,
        "tokens": {
            "algorithm": current_app.config.get("JWT_ALGORITHM", "HS256"),
            "accessTtlSeconds": int(access_ttl),
            "refreshTtlSeconds": int(REFRESH_TOKEN_TTL.total_seconds()),
        },
    }
    return json_response(payload, status=200 if database == "ok" else 503)
