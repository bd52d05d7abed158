# tests/unit/infra/test_refresh_token_store.py
from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest
from sqlalchemy import func, select

from authcore.infra.sqlalchemy.refresh_token_store import SQLAlchemyRefreshTokenStore, as_utc
from authcore.models import RefreshToken
from authcore.services._shared.errors import PersistenceError
from tests.factories.refresh_token import RefreshTokenFactory
from tests.factories.user import UserFactory

EXPIRES = datetime(2026, 5, 1, 9, 0, tzinfo=UTC)


@pytest.fixture()
def store() -> SQLAlchemyRefreshTokenStore:
    return SQLAlchemyRefreshTokenStore()


def _count(session) -> int:
    return session.execute(select(func.count()).select_from(RefreshToken)).scalar_one()


def test_persist_then_find_resolves_owner(store, session):
    user = UserFactory(email="owner@x.com")

    view = store.persist(
        user_id=str(user.id),
        token="rt-1",
        ip_address="198.51.100.4",
        user_agent="pytest-agent/1.0",
        expires_at=EXPIRES,
    )
    assert view.revoked is False

    session.expire_all()
    found = store.find_by_token("rt-1")

    assert found is not None
    assert found.user.id == str(user.id)
    assert found.user.email == "owner@x.com"
    assert found.user.role == "user"
    assert found.ip_address == "198.51.100.4"
    assert found.user_agent == "pytest-agent/1.0"
    assert found.expires_at == EXPIRES
    assert found.expires_at.tzinfo is not None
    assert found.revoked is False


def test_find_unknown_token_returns_none(store):
    assert store.find_by_token("missing") is None


def test_find_is_exact_match(store):
    RefreshTokenFactory(token="abc")

    assert store.find_by_token("ABC") is None
    assert store.find_by_token("abc ") is None


def test_persist_for_unknown_user_writes_nothing(store, session):
    before = _count(session)

    with pytest.raises(PersistenceError):
        store.persist(
            user_id="999999",
            token="orphan",
            ip_address="127.0.0.1",
            user_agent="ua",
            expires_at=EXPIRES,
        )

    assert _count(session) == before


def test_persist_duplicate_token_fails_atomically(store, session):
    user = UserFactory()
    store.persist(
        user_id=str(user.id), token="dup", ip_address="a", user_agent="a", expires_at=EXPIRES
    )

    with pytest.raises(PersistenceError):
        store.persist(
            user_id=str(user.id), token="dup", ip_address="b", user_agent="b", expires_at=EXPIRES
        )

    found = store.find_by_token("dup")
    assert found is not None
    assert found.ip_address == "a"
    assert _count(session) == 1


def test_mark_revoked_flips_flag_once(store, session):
    row = RefreshTokenFactory()
    session.commit()

    assert store.mark_revoked(row.token) is True
    session.expire_all()
    found = store.find_by_token(row.token)
    assert found is not None
    assert found.revoked is True

    assert store.mark_revoked("missing") is False


def test_as_utc_normalizes_naive_and_offset_datetimes():
    naive = datetime(2026, 1, 1, 12, 0)
    offset = datetime(2026, 1, 1, 16, 0, tzinfo=timezone(timedelta(hours=2)))

    assert as_utc(naive) == datetime(2026, 1, 1, 12, 0, tzinfo=UTC)
    assert as_utc(offset) == datetime(2026, 1, 1, 14, 0, tzinfo=UTC)
    assert as_utc(offset).utcoffset() == timedelta(0)
