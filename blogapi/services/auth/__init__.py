from __future__ import annotations

from .dto import AuthResult, LoginIn, RegisterIn, TokenPairOut, UserProfileOut, UserPublicOut
from .service import AuthService

__all__ = [
    "AuthResult",
    "AuthService",
    "LoginIn",
    "RegisterIn",
    "TokenPairOut",
    "UserProfileOut",
    "UserPublicOut",
]
