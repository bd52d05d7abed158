# authcore/services/_shared/base.py
from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

from authcore.core import errors as api_errors
from authcore.services._shared.errors import (
    AuthenticationError,
    HashingError,
    PersistenceError,
    ServiceError,
)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Own an injectable clock so validity windows are testable.
    * Centralize error translation from service errors to API errors.

    Notes
    -----
    - Services never build HTTP responses; routes re-raise the translated error.
    - Collaborators are passed in explicitly, there is no global registry.
    """

    def __init__(self, *, clock: Clock | None = None) -> None:
        """
        Initialize the base service.

        :param clock: Callable returning an aware UTC ``datetime``.
        :type clock: Callable[[], datetime] | None
        """
        self._clock: Clock = clock or utc_now

    def now(self) -> datetime:
        """Return the service clock's current instant."""
        return self._clock()

    # -------------------------- Error handling ------------------------------

    def translate_exceptions(self, exc: Exception) -> Exception:
        """
        Map service-level errors to API-level (HTTP) errors.

        :param exc: Exception raised within the service.
        :type exc: Exception
        :returns: Translated exception ready to be re-raised.
        :rtype: Exception
        """
        if isinstance(exc, AuthenticationError):
            # → 401, message already uniform per flow
            return api_errors.Unauthorized(exc.message)

        if isinstance(exc, PersistenceError | HashingError):
            # → 503; internal detail stays in the logs
            return api_errors.ServiceUnavailable()

        # Any other ServiceError subclass → 400 Bad Request
        if isinstance(exc, ServiceError):
            return api_errors.APIError(
                message=str(exc),
                status_code=400,
                code="bad_request",
            )

        # Fallback: return untouched (will bubble up to Flask handler)
        return exc
