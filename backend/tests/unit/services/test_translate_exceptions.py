"""Mapping of service-level errors onto HTTP problem responses."""

from __future__ import annotations

import pytest

from authcore.core.errors import APIError, ServiceUnavailable, Unauthorized
from authcore.services._shared.base import BaseService
from authcore.services._shared.errors import (
    AuthenticationError,
    ConflictError,
    HashingError,
    PersistenceError,
    SigningError,
)


@pytest.fixture()
def service() -> BaseService:
    return BaseService()


def test_authentication_error_becomes_401_with_same_message(service):
    err = service.translate_exceptions(AuthenticationError("Invalid credentials"))

    assert isinstance(err, Unauthorized)
    assert err.status_code == 401
    assert err.message == "Invalid credentials"


@pytest.mark.parametrize("exc", [PersistenceError("disk full"), HashingError("boom")])
def test_store_and_hashing_failures_become_503_without_detail(service, exc):
    err = service.translate_exceptions(exc)

    assert isinstance(err, ServiceUnavailable)
    assert err.status_code == 503
    assert "disk full" not in err.message


@pytest.mark.parametrize(
    "exc", [SigningError("bad secret"), ConflictError("User", "email already exists")]
)
def test_other_service_errors_become_400(service, exc):
    err = service.translate_exceptions(exc)

    assert type(err) is APIError
    assert err.status_code == 400
    assert err.code == "bad_request"


def test_non_service_errors_pass_through(service):
    original = RuntimeError("unexpected")

    assert service.translate_exceptions(original) is original
