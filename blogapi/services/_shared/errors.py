"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never import Flask or HTTP
helpers. They are the stable contract between repositories, domain models and
application services.

The translation to HTTP responses (RFC 7807) is handled by
``blogapi/core/errors.py`` via ``BaseService.translate_exceptions()``.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str, *, column: str | None = None) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    PostgreSQL names the constraint in its message; SQLite only names the
    column (``UNIQUE constraint failed: users.email``), hence ``column``.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.
    constraint_name : str
        The name of the database constraint to match (e.g., 'uq_users_email').
    column : str, optional
        Qualified column the constraint covers (e.g., 'users.email').

    Returns
    -------
    bool
        True if the IntegrityError matches the given constraint.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    if constraint_name.lower() in message:
        return True
    return column is not None and column.lower() in message


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - The API layer translates them through ``BaseService.translate_exceptions``.
    """

    pass


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


class ValidationError(ServiceError):
    """Raised when input is missing or malformed (→ 400)."""


class AuthenticationError(ServiceError):
    """
    Raised when credentials or tokens cannot be trusted (→ 401).

    :param message: Client-facing summary.
    :param reason: Optional underlying verification error text.
    """

    def __init__(self, message: str, reason: str | None = None) -> None:
        super().__init__(message)
        self.reason = reason


class AuthorizationError(ServiceError):
    """Raised when an authenticated actor may not touch a resource (→ 403)."""


class ConflictError(ValidationError):
    """Raised when a unique value is already taken (→ 400)."""


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "Post").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __str__(self) -> str:
        return f"{self.entity} not found"


@dataclass(slots=True)
class PersistenceError(ServiceError):
    """
    Raised when the store fails (→ 500). ``reason`` carries the raw store text.

    :param message: Operation summary (e.g., "Error creating post").
    :type message: str
    :param reason: Underlying error message, passed through verbatim.
    :type reason: str
    """

    message: str
    reason: str

    def __str__(self) -> str:
        return self.message
