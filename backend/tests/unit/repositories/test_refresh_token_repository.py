"""Tests for the user and refresh-token repositories."""

from __future__ import annotations

from authcore.repositories import RefreshTokenRepository, UserRepository
from tests.factories.refresh_token import RefreshTokenFactory
from tests.factories.user import UserFactory


class TestUserRepository:
    def test_get_by_email(self, session):
        user = UserFactory(email="find@example.com")
        repo = UserRepository(session=session)

        assert repo.get_by_email("find@example.com") is user
        assert repo.get_by_email("FIND@example.com") is None

    def test_get_by_pk(self, session):
        user = UserFactory()
        repo = UserRepository(session=session)

        assert repo.get(user.id) is user
        assert repo.get(user.id + 1000) is None


class TestRefreshTokenRepository:
    def test_get_by_token_loads_user(self, session):
        rt = RefreshTokenFactory(token="lookup-me")
        session.flush()
        session.expunge_all()

        found = RefreshTokenRepository(session=session).get_by_token("lookup-me")

        assert found is not None
        assert found.id == rt.id
        assert "user" in found.__dict__  # resolved in the same query
        assert found.user.email == rt.user.email

    def test_mark_revoked_counts_rows(self, session):
        RefreshTokenFactory(token="to-revoke")
        repo = RefreshTokenRepository(session=session)

        assert repo.mark_revoked("to-revoke") == 1
        assert repo.mark_revoked("unknown") == 0
        assert repo.get_by_token("to-revoke").revoked is True

    def test_falls_back_to_flask_session(self, db):
        repo = RefreshTokenRepository()

        assert repo.session is db.session
