# blogapi/infra/jwt/jwt_token_issuer.py
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any, cast

import jwt

from blogapi.services._shared.ports import (
    ACCESS_TOKEN_TYPE,
    REFRESH_TOKEN_TYPE,
    TokenError,
    TokenPair,
    TokenProvider,
    TokenSubject,
)

ALGORITHM = "HS256"


@dataclass(slots=True)
class JWTTokenIssuer(TokenProvider):
    """
    PyJWT adapter signing access and refresh tokens with separate HMAC secrets.

    Access tokens carry ``sub``, ``username`` and ``type="access"``. Refresh
    tokens carry ``sub``, ``type="refresh"`` and a random ``jti`` so two
    refresh tokens minted in the same second still differ.

    :param access_secret: Secret for access tokens.
    :param refresh_secret: Secret for refresh tokens. Must differ from ``access_secret``.
    :param access_expires: Access token lifetime.
    :param refresh_expires: Refresh token lifetime.
    :raises RuntimeError: When a secret is empty or both secrets are equal.
    """

    access_secret: str = field(repr=False)
    refresh_secret: str = field(repr=False)
    access_expires: timedelta = timedelta(minutes=15)
    refresh_expires: timedelta = timedelta(days=30)

    def __post_init__(self) -> None:
        if not self.access_secret or not self.refresh_secret:
            raise RuntimeError("Access and refresh token secrets must be configured.")
        if self.access_secret == self.refresh_secret:
            raise RuntimeError("Access and refresh token secrets must differ.")

    # ------------------------------ Issuing ---------------------------------

    def _encode(self, claims: dict[str, Any], *, secret: str, expires: timedelta) -> str:
        now = datetime.now(UTC)
        payload = {**claims, "iat": now, "exp": now + expires}
        return jwt.encode(payload, secret, algorithm=ALGORITHM)

    def issue_tokens(self, subject: TokenSubject) -> TokenPair:
        """Mint a fresh access/refresh pair for ``subject``."""
        sub = str(subject.user_id)
        access = self._encode(
            {"sub": sub, "username": subject.username, "type": ACCESS_TOKEN_TYPE},
            secret=self.access_secret,
            expires=self.access_expires,
        )
        refresh = self._encode(
            {"sub": sub, "type": REFRESH_TOKEN_TYPE, "jti": uuid.uuid4().hex},
            secret=self.refresh_secret,
            expires=self.refresh_expires,
        )
        return TokenPair(access_token=access, refresh_token=refresh)

    # ------------------------------ Verifying -------------------------------

    def _decode(self, token: str, *, secret: str, expected_type: str) -> dict[str, Any]:
        try:
            claims = jwt.decode(
                token,
                secret,
                algorithms=[ALGORITHM],
                options={"require": ["exp", "sub"]},
            )
        except jwt.PyJWTError as exc:
            raise TokenError(str(exc)) from exc
        if claims.get("type") != expected_type:
            raise TokenError(f"Expected a {expected_type} token")
        return cast(dict[str, Any], claims)

    def decode_access(self, token: str) -> dict[str, Any]:
        """Verify an access token and return its claims.

        :raises TokenError: On bad signature, expiry, malformed input or wrong type.
        """
        return self._decode(token, secret=self.access_secret, expected_type=ACCESS_TOKEN_TYPE)

    def decode_refresh(self, token: str) -> dict[str, Any]:
        """Verify a refresh token and return its claims.

        :raises TokenError: On bad signature, expiry, malformed input or wrong type.
        """
        return self._decode(token, secret=self.refresh_secret, expected_type=REFRESH_TOKEN_TYPE)
