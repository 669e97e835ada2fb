# blogapi/services/auth/service.py
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from blogapi.models.base import as_utc
from blogapi.models.user import User
from blogapi.repositories.user import UserRepository
from blogapi.services._shared.base import BaseService, ServiceContext
from blogapi.services._shared.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    violates,
)
from blogapi.services._shared.ports.token_provider import (
    TokenError,
    TokenProvider,
    TokenSubject,
)
from blogapi.services.auth.dto import (
    AuthResult,
    LoginIn,
    RegisterIn,
    TokenPairOut,
    UserProfileOut,
    UserPublicOut,
)

log = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials."


def _public(user: User) -> UserPublicOut:
    return UserPublicOut(id=user.id, username=user.username, name=user.name, email=user.email)


class AuthService(BaseService):
    """
    Authentication lifecycle service (register / login / refresh / profile).

    Tokens are stateless: refresh verifies the signature and the user's
    existence only, and logout is a cookie-clearing concern of the API layer.
    """

    def __init__(self, *, token_provider: TokenProvider, ctx: ServiceContext | None = None) -> None:
        """
        :param token_provider: Adapter for issuing/verifying JWTs.
        :param ctx: Request-scoped context.
        """
        super().__init__(ctx=ctx)
        self.tokens = token_provider

    def _issue(self, user_id: int, username: str) -> TokenPairOut:
        pair = self.tokens.issue_tokens(TokenSubject(user_id=user_id, username=username))
        return TokenPairOut(access_token=pair.access_token, refresh_token=pair.refresh_token)

    # ------------------------------------------------------------------ #
    # Register
    # ------------------------------------------------------------------ #

    def register(self, dto: RegisterIn) -> AuthResult:
        """
        Create an account and sign it in.

        One lookup matches username OR email and the oldest matching user
        decides the message: ``Username already exists`` when that user holds
        the username (including a user holding both), otherwise ``Email
        already exists``.

        :raises ConflictError: ``Username already exists`` / ``Email already exists``.
        :raises PersistenceError: On store failure.
        """
        with self.store_errors("Error registering user"), self.rw_uow() as uow:
            repo: UserRepository = uow.users
            existing = repo.find_by_username_or_email(username=dto.username, email=dto.email)
            if existing is not None:
                if existing.username == dto.username.strip():
                    raise ConflictError("Username already exists")
                raise ConflictError("Email already exists")

            try:
                user = repo.add(
                    User(
                        username=dto.username,
                        name=dto.name,
                        email=dto.email,
                        password=dto.password,
                    )
                )
            except IntegrityError as exc:
                # Lost a race against a concurrent registration.
                if violates(exc, "uq_users_username", column="users.username"):
                    raise ConflictError("Username already exists") from exc
                if violates(exc, "uq_users_email", column="users.email"):
                    raise ConflictError("Email already exists") from exc
                raise

            public = _public(user)

        log.info("auth.register", extra={"user_id": public.id})
        return AuthResult(user=public, tokens=self._issue(public.id, public.username))

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> AuthResult:
        """
        Authenticate by username-or-email and password.

        Unknown identifier and wrong password fail identically.

        :raises AuthenticationError: ``Invalid credentials.``
        """
        with self.store_errors("Error logging in user"), self.ro_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.authenticate(dto.identifier, dto.password)
            if user is None:
                log.warning("auth.login.failed")
                raise AuthenticationError(INVALID_CREDENTIALS)
            public = _public(user)

        log.info("auth.login", extra={"user_id": public.id})
        return AuthResult(user=public, tokens=self._issue(public.id, public.username))

    # ------------------------------------------------------------------ #
    # Refresh
    # ------------------------------------------------------------------ #

    def refresh(self, refresh_token: str | None) -> TokenPairOut:
        """
        Verify a refresh token and mint a brand-new pair.

        The old refresh token is not revoked; it stays usable until expiry.

        :raises AuthenticationError: Missing token, failed verification, or deleted user.
        """
        if not refresh_token:
            raise AuthenticationError("No refresh token provided")

        try:
            claims = self.tokens.decode_refresh(refresh_token)
        except TokenError as exc:
            raise AuthenticationError("Invalid refresh token", reason=str(exc)) from exc

        user_id = self._coerce_user_id(claims.get("sub"))
        with self.store_errors("Error refreshing token"), self.ro_uow() as uow:
            user = uow.users.get(user_id) if user_id is not None else None
            if user is None:
                raise AuthenticationError("User not found")
            username = user.username

        log.info("auth.refresh", extra={"user_id": user_id})
        return self._issue(user_id, username)

    # ------------------------------------------------------------------ #
    # Profile
    # ------------------------------------------------------------------ #

    def get_profile(self, user_id: int) -> UserProfileOut:
        """
        Return the stored profile of ``user_id``.

        :raises NotFoundError: If the account no longer exists.
        """
        with self.store_errors("Error fetching profile"), self.ro_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            return UserProfileOut(
                id=user.id,
                username=user.username,
                name=user.name,
                email=user.email,
                created_at=as_utc(user.created_at),
                updated_at=as_utc(user.updated_at),
            )

    @staticmethod
    def _coerce_user_id(subject: object) -> int | None:
        if isinstance(subject, int):
            return subject
        if isinstance(subject, str) and subject.isdigit():
            return int(subject)
        return None
