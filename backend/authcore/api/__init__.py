"""HTTP API package: mounts the versioned auth blueprints."""

from __future__ import annotations

from flask import Flask


def init_app(app: Flask) -> None:
    """Mount the v1 routes below ``API_BASE_PREFIX`` (``/api/v1/...``)."""

    from authcore.api.v1 import register_routes

    register_routes(app, base_prefix=app.config.get("API_BASE_PREFIX", "/api"))


__all__ = ["init_app"]
