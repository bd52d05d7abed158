# authcore/services/auth/service.py
from __future__ import annotations

import logging

from authcore.services._shared.base import BaseService, Clock
from authcore.services._shared.errors import AuthenticationError, ConflictError
from authcore.services._shared.ports import (
    PasswordHasher,
    RefreshTokenStore,
    TokenProvider,
    UserStore,
)
from authcore.services.auth.dto import (
    LoginOut,
    RefreshIn,
    RefreshOut,
    RegisterIn,
    SessionUserOut,
    UserPublicOut,
)
from authcore.services.auth.tokens import (
    REFRESH_TOKEN_TTL,
    RefreshTokenState,
    evaluate_refresh_token,
)

log = logging.getLogger(__name__)

# One message per flow, whatever the internal cause
DUPLICATE_EMAIL_MESSAGE = "Email already registered"
REFRESH_REJECTED_MESSAGE = "Invalid or expired refresh token"


class AuthService(BaseService):
    """
    Authentication lifecycle service (register / login / refresh).

    Refresh tokens are NOT rotated: a valid refresh token yields a new access
    token and the stored record is left untouched, so concurrent refresh calls
    with the same token are safe and independent.
    """

    def __init__(
        self,
        *,
        users: UserStore,
        hasher: PasswordHasher,
        token_provider: TokenProvider,
        refresh_store: RefreshTokenStore,
        clock: Clock | None = None,
    ) -> None:
        """
        Initialize the service with its dependencies.

        :param users: User lookups and inserts.
        :param hasher: Password hasher used on registration.
        :param token_provider: Adapter for signing JWTs.
        :param refresh_store: Durable store of issued refresh tokens.
        :param clock: Source of "now" for expiry decisions.
        """
        super().__init__(clock=clock)
        self.users = users
        self.hasher = hasher
        self.tokens = token_provider
        self.refresh_store = refresh_store

    # ------------------------------------------------------------------ #
    # Register
    # ------------------------------------------------------------------ #

    def register(self, dto: RegisterIn) -> UserPublicOut:
        """
        Create a user with a hashed password. No tokens are issued.

        :raises AuthenticationError: If the email is already registered,
            including when a concurrent insert wins the race.
        :raises HashingError: If the password cannot be hashed.
        :raises PersistenceError: On other store failures.
        """
        if self.users.find_by_email(dto.email) is not None:
            log.info("Registration refused", extra={"event": "register_duplicate"})
            raise AuthenticationError(DUPLICATE_EMAIL_MESSAGE)

        password_hash = self.hasher.hash(dto.password)
        try:
            record = self.users.create(email=dto.email, password_hash=password_hash, name=dto.name)
        except ConflictError as exc:
            log.info("Registration lost an insert race", extra={"event": "register_duplicate"})
            raise AuthenticationError(DUPLICATE_EMAIL_MESSAGE) from exc

        log.info("User registered", extra={"event": "register", "user_id": record.id})
        return UserPublicOut.from_record(record)

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, user: UserPublicOut, *, ip_address: str, user_agent: str) -> LoginOut:
        """
        Issue an access/refresh pair for an already verified user.

        The caller MUST have checked credentials first; this method does not
        re-verify. The refresh token is persisted before anything is returned.

        :param user: Output of the credential verifier.
        :param ip_address: Client address, stored for audit only.
        :param user_agent: Client agent, stored for audit only.
        :raises PersistenceError: If the refresh token cannot be stored; no
            token is returned in that case.
        """
        access = self.tokens.create_access_token(
            identity=user.id,
            additional_claims={"email": user.email, "role": user.role},
        )
        refresh = self.tokens.create_refresh_token(
            identity=user.id,
            additional_claims={"email": user.email},
            expires_delta=REFRESH_TOKEN_TTL,
        )

        self.refresh_store.persist(
            user_id=user.id,
            token=refresh,
            ip_address=ip_address,
            user_agent=user_agent,
            expires_at=self.now() + REFRESH_TOKEN_TTL,
        )

        log.info("Login issued tokens", extra={"event": "login", "user_id": user.id})
        return LoginOut(
            access_token=access,
            refresh_token=refresh,
            user=SessionUserOut(id=user.id, email=user.email, role=user.role),
        )

    # ------------------------------------------------------------------ #
    # Refresh (no rotation)
    # ------------------------------------------------------------------ #

    def refresh(self, dto: RefreshIn) -> RefreshOut:
        """
        Exchange a stored, unrevoked, unexpired refresh token for an access token.

        Validity is decided by the stored record alone; the JWT itself is not
        decoded here.

        :raises AuthenticationError: For unknown, revoked or expired tokens.
        :raises PersistenceError: If the store lookup fails.
        """
        view = self.refresh_store.find_by_token(dto.token)
        state = evaluate_refresh_token(view, self.now())
        if state is not RefreshTokenState.VALID or view is None:
            log.info(
                "Refresh rejected",
                extra={"event": "refresh_rejected", "state": state.value},
            )
            raise AuthenticationError(REFRESH_REJECTED_MESSAGE)

        owner = view.user
        access = self.tokens.create_access_token(
            identity=owner.id,
            additional_claims={"email": owner.email, "role": owner.role},
        )
        log.info("Access token refreshed", extra={"event": "refresh", "user_id": owner.id})
        return RefreshOut(access_token=access)
