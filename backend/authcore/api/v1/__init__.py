"""Version 1 of the auth API."""

from __future__ import annotations

from flask import Flask

API_VERSION = "v1"


def register_routes(app: Flask, *, base_prefix: str) -> None:
    """Register the health and auth blueprints under ``{base_prefix}/v1``."""

    # Local imports keep blueprint modules out of the factory import graph
    from .auth import bp as auth_bp
    from .health import bp as health_bp

    version_prefix = f"{base_prefix.rstrip('/')}/{API_VERSION}"
    app.register_blueprint(health_bp, url_prefix=version_prefix)
    app.register_blueprint(auth_bp, url_prefix=f"{version_prefix}{auth_bp.url_prefix}")


__all__ = ["API_VERSION", "register_routes"]
