# tests/unit/infra/test_user_store.py
from __future__ import annotations

import pytest

from authcore.infra.sqlalchemy.user_store import SQLAlchemyUserStore
from authcore.services._shared.errors import ConflictError


@pytest.fixture()
def store() -> SQLAlchemyUserStore:
    return SQLAlchemyUserStore()


def test_create_returns_record_with_defaults(store):
    record = store.create(email="a@x.com", password_hash="$2b$10$hash", name="Ada")

    assert record.id.isdigit()
    assert record.email == "a@x.com"
    assert record.password_hash == "$2b$10$hash"
    assert record.name == "Ada"
    assert record.role == "user"


def test_find_by_email_is_exact(store):
    store.create(email="Mixed@Case.com", password_hash="h")

    assert store.find_by_email("Mixed@Case.com") is not None
    assert store.find_by_email("mixed@case.com") is None


def test_unique_constraint_backstops_duplicate_create(store):
    """Simulates the check-then-create race: the second insert hits uq_users_email."""
    store.create(email="race@x.com", password_hash="h1")

    with pytest.raises(ConflictError):
        store.create(email="race@x.com", password_hash="h2")

    found = store.find_by_email("race@x.com")
    assert found is not None
    assert found.password_hash == "h1"
