# authcore/services/auth/credentials.py
from __future__ import annotations

import logging

from authcore.services._shared.ports import PasswordHasher, UserStore
from authcore.services.auth.dto import LoginIn, UserPublicOut

log = logging.getLogger(__name__)

# Plaintext behind the equalization hash; never matches a real login
_TIMING_DUMMY_PASSWORD = "authcore-timing-dummy"


class CredentialVerifier:
    """
    Check an email/password pair against the user store.

    Unknown email and wrong password produce the same ``None`` result and
    cost the same bcrypt work: when no user matches, the password is still
    verified against a dummy hash computed once per verifier.
    """

    def __init__(self, *, users: UserStore, hasher: PasswordHasher) -> None:
        self.users = users
        self.hasher = hasher
        self._dummy_hash: str | None = None

    def _timing_dummy(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = self.hasher.hash(_TIMING_DUMMY_PASSWORD)
        return self._dummy_hash

    def validate_credentials(self, dto: LoginIn) -> UserPublicOut | None:
        """
        Return the password-free user when credentials match, else ``None``.

        :param dto: Email (matched exactly) and raw password.
        :returns: :class:`UserPublicOut` on success; ``None`` for any mismatch.
        :raises PersistenceError: If the user store lookup fails.
        """
        record = self.users.find_by_email(dto.email)
        if record is None:
            # do NOT return before running the hasher
            self.hasher.verify(dto.password, self._timing_dummy())
            log.info("Credential check failed", extra={"event": "credentials_rejected"})
            return None

        if not self.hasher.verify(dto.password, record.password_hash):
            log.info("Credential check failed", extra={"event": "credentials_rejected"})
            return None

        return UserPublicOut.from_record(record)
