"""
DTOs for AuthService.

Inputs arrive already validated by the API schemas; outputs never expose the
password hash.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class RegisterIn:
    """
    Input DTO for user registration.

    :param username: Public handle, unique.
    :type username: str
    :param name: Display name.
    :type name: str
    :param email: Email address, unique (normalized to lowercase).
    :type email: str
    :param password: Raw password (at least 8 characters).
    :type password: str
    """

    username: str
    name: str
    email: str
    password: str


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param identifier: Username or email.
    :type identifier: str
    :param password: Raw password.
    :type password: str
    """

    identifier: str
    password: str


# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserPublicOut:
    """Public user fields returned by register and login."""

    id: int
    username: str
    name: str
    email: str


@dataclass(frozen=True, slots=True)
class UserProfileOut:
    """Profile of the authenticated user, with timestamps."""

    id: int
    username: str
    name: str
    email: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Freshly minted access/refresh pair.

    :param access_token: Signed access JWT.
    :param refresh_token: Signed refresh JWT.
    """

    access_token: str
    refresh_token: str


@dataclass(frozen=True, slots=True)
class AuthResult:
    """Outcome of register/login: the public user and a fresh token pair."""

    user: UserPublicOut
    tokens: TokenPairOut
