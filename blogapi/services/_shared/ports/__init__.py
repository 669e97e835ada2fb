"""
blogapi.services._shared.ports
==============================

*Ports* (hexagonal interfaces) the service layer depends on.

Modules
-------
- :mod:`token_provider`:
    Defines :class:`~.TokenProvider`, the abstraction for issuing and
    verifying the access/refresh token pair, plus the deterministic
    :class:`~.StubTokenProvider` used by unit tests.

Concrete adapters live under ``blogapi.infra``.
"""

from __future__ import annotations

from .token_provider import (
    ACCESS_TOKEN_TYPE,
    REFRESH_TOKEN_TYPE,
    StubTokenProvider,
    TokenError,
    TokenPair,
    TokenProvider,
    TokenSubject,
)

__all__ = [
    "ACCESS_TOKEN_TYPE",
    "REFRESH_TOKEN_TYPE",
    "StubTokenProvider",
    "TokenError",
    "TokenPair",
    "TokenProvider",
    "TokenSubject",
]
