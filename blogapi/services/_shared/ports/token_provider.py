from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Protocol

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


class TokenError(Exception):
    """Raised when a token is expired, forged, malformed or of the wrong type."""


@dataclass(frozen=True, slots=True)
class TokenSubject:
    """
    Identity a token pair is minted for.

    :param user_id: User primary key (``sub`` claim).
    :param username: Username embedded in the access token only.
    """

    user_id: int
    username: str


@dataclass(frozen=True, slots=True)
class TokenPair:
    """Encoded access and refresh tokens issued together."""

    access_token: str
    refresh_token: str


class TokenProvider(Protocol):
    """Port for issuing and verifying the access/refresh token pair."""

    access_expires: timedelta
    refresh_expires: timedelta

    def issue_tokens(self, subject: TokenSubject) -> TokenPair: ...

    def decode_access(self, token: str) -> dict[str, Any]: ...

    def decode_refresh(self, token: str) -> dict[str, Any]: ...


class StubTokenProvider:
    """Deterministic token provider used in unit tests.

    Tokens are opaque strings remembered in memory; ``expire`` lets a test
    invalidate a token without waiting.
    """

    def __init__(
        self,
        *,
        access_expires: timedelta = timedelta(minutes=15),
        refresh_expires: timedelta = timedelta(days=30),
    ) -> None:
        self.access_expires = access_expires
        self.refresh_expires = refresh_expires
        self._seq = 0
        self._issued: dict[str, dict[str, Any]] = {}
        self._expired: set[str] = set()

    def _mk(self, ttype: str, claims: dict[str, Any], exp_delta: timedelta) -> str:
        self._seq += 1
        token = f"{ttype}.{claims['sub']}.{self._seq}"
        now = datetime.now(tz=timezone.utc)
        self._issued[token] = {
            **claims,
            "type": ttype,
            "iat": int(now.timestamp()),
            "exp": int((now + exp_delta).timestamp()),
        }
        return token

    def issue_tokens(self, subject: TokenSubject) -> TokenPair:
        access = self._mk(
            ACCESS_TOKEN_TYPE,
            {"sub": str(subject.user_id), "username": subject.username},
            self.access_expires,
        )
        refresh = self._mk(REFRESH_TOKEN_TYPE, {"sub": str(subject.user_id)}, self.refresh_expires)
        return TokenPair(access_token=access, refresh_token=refresh)

    def expire(self, token: str) -> None:
        self._expired.add(token)

    def _decode(self, token: str, expected_type: str) -> dict[str, Any]:
        payload = self._issued.get(token)
        if payload is None:
            raise TokenError("invalid signature")
        if token in self._expired:
            raise TokenError("jwt expired")
        if payload["type"] != expected_type:
            raise TokenError(f"expected a {expected_type} token")
        return dict(payload)

    def decode_access(self, token: str) -> dict[str, Any]:
        return self._decode(token, ACCESS_TOKEN_TYPE)

    def decode_refresh(self, token: str) -> dict[str, Any]:
        return self._decode(token, REFRESH_TOKEN_TYPE)
