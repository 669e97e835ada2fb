# blogapi/services/_shared/base.py
from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError

from blogapi.core import errors as api_errors
from blogapi.repositories.base import Pagination
from blogapi.services._shared.errors import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    PersistenceError,
    ServiceError,
    ValidationError,
)
from blogapi.services._shared.policies.common import is_owner
from blogapi.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)

log = logging.getLogger(__name__)


@dataclass(slots=True)
class ServiceContext:
    """
    Carry request-scoped data into services.

    :param actor_id: Authenticated user identifier.
    :param actor_username: Username claim of the authenticated user.
    :param request_id: Correlation id for logging/tracing.
    """

    actor_id: int | None = None
    actor_username: str | None = None
    request_id: str | None = None


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work.
    * Wrap store failures into :class:`PersistenceError`.
    * Centralize error translation to API errors.
    * Offer shared pagination clamping and ownership checks.
    """

    def __init__(self, *, ctx: ServiceContext | None = None) -> None:
        self.ctx = ctx or ServiceContext()

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork()

    def ro_uow(self, *, enforce_db_readonly: bool = True) -> SQLAlchemyReadOnlyUnitOfWork:
        return SQLAlchemyReadOnlyUnitOfWork(enforce_db_readonly=enforce_db_readonly)

    @contextmanager
    def store_errors(self, message: str) -> Iterator[None]:
        """
        Re-raise store failures as :class:`PersistenceError`.

        :param message: Operation summary shown to clients (e.g. "Error creating post").
        :raises PersistenceError: Wrapping any :class:`SQLAlchemyError`.
        """
        try:
            yield
        except SQLAlchemyError as exc:
            log.error("%s: %s", message, exc, exc_info=True)
            raise PersistenceError(message, str(exc)) from exc

    # ----------------------- Validation utilities ---------------------------

    def ensure_pagination(self, *, page: int, limit: int) -> Pagination:
        """
        Build a Pagination value object with basic clamping.

        :param page: 1-based page number.
        :param limit: Page size.
        :returns: Pagination instance.
        :rtype: Pagination
        """
        return Pagination(page=max(1, int(page)), limit=max(1, int(limit)))

    # --------------------------- AuthZ --------------------------------

    def ensure_owner(self, actor_id: int | None, owner_id: int, *, msg: str) -> None:
        """
        Ensure the current actor is the resource owner.

        :raises AuthorizationError: If actor is not the owner.
        """
        if not is_owner(actor_id=actor_id, owner_id=owner_id):
            raise AuthorizationError(msg)

    # -------------------------- Error handling ------------------------------

    @staticmethod
    def translate_exceptions(exc: Exception) -> Exception:
        """
        Map domain/service-level errors to API-level (HTTP) errors.

        :param exc: Exception raised within the service.
        :returns: Translated exception ready to be re-raised.
        :rtype: Exception
        """
        if isinstance(exc, NotFoundError):
            return api_errors.NotFound(str(exc))

        if isinstance(exc, ValidationError):
            return api_errors.BadRequest(str(exc))

        if isinstance(exc, AuthenticationError):
            return api_errors.Unauthorized(str(exc), error=exc.reason)

        if isinstance(exc, AuthorizationError):
            return api_errors.Forbidden(str(exc))

        if isinstance(exc, PersistenceError):
            return api_errors.InternalError(exc.message, error=exc.reason)

        # Any other ServiceError subclass → 400 Bad Request
        if isinstance(exc, ServiceError):
            return api_errors.BadRequest(str(exc))

        # Fallback: return untouched (will bubble up to Flask handler)
        return exc
