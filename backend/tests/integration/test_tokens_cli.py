"""Tests for the ``flask tokens`` command group."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from authcore.infra.sqlalchemy.refresh_token_store import SQLAlchemyRefreshTokenStore
from tests.factories.refresh_token import RefreshTokenFactory


@pytest.fixture()
def runner(app):
    return app.test_cli_runner()


def test_revoke_marks_token_and_blocks_refresh(runner, client, session):
    row = RefreshTokenFactory()
    session.commit()

    result = runner.invoke(args=["tokens", "revoke", row.token])

    assert result.exit_code == 0, result.output
    assert "revoked" in result.output
    view = SQLAlchemyRefreshTokenStore().find_by_token(row.token)
    assert view is not None and view.revoked is True

    resp = client.post("/api/v1/auth/refresh", json={"token": row.token})
    assert resp.status_code == 401


def test_revoke_unknown_token_fails(runner):
    result = runner.invoke(args=["tokens", "revoke", "missing"])

    assert result.exit_code == 1
    assert "not found" in result.output


def test_status_reports_state(runner, session):
    valid = RefreshTokenFactory(ip_address="192.0.2.10")
    expired = RefreshTokenFactory(expires_at=datetime.now(UTC) - timedelta(seconds=1))
    session.commit()

    out = runner.invoke(args=["tokens", "status", valid.token]).output
    assert "state:      valid" in out
    assert "192.0.2.10" in out

    assert "state:      invalid" in runner.invoke(args=["tokens", "status", expired.token]).output
    assert "state:      unknown" in runner.invoke(args=["tokens", "status", "missing"]).output
