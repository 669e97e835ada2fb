"""Shared API helpers for request parsing and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar, cast

from flask import Response, current_app, g, jsonify, request
from marshmallow import ValidationError as MarshmallowValidationError

from blogapi.core.errors import BadRequest, Forbidden
from blogapi.core.extensions import get_token_issuer
from blogapi.schemas.common import PaginationQuerySchema, RequestSchema
from blogapi.services._shared.base import ServiceContext
from blogapi.services._shared.dto import PaginationIn
from blogapi.services._shared.ports import TokenError

F = TypeVar("F", bound=Callable[..., Any])

SIGN_IN_REQUIRED = "You need to sign in before continuing."
INVALID_TOKEN = "Invalid Token"


@dataclass(frozen=True, slots=True)
class Identity:
    """Authenticated principal resolved from the access token."""

    user_id: int
    username: str | None


def parse_pagination() -> PaginationIn:
    """Parse ``page``/``limit`` from ``request.args``, falling back to defaults."""

    default_limit = int(current_app.config.get("DEFAULT_PAGE_SIZE", 10))
    data = PaginationQuerySchema(default_limit=default_limit).load(request.args)
    return PaginationIn(page=data["page"], limit=data["limit"])


def load_body(schema: RequestSchema) -> dict[str, Any]:
    """
    Load the JSON body through ``schema``.

    :raises BadRequest: With the schema's summary message and field details.
    """

    payload = request.get_json(silent=True)
    try:
        return cast(dict[str, Any], schema.load(payload if isinstance(payload, dict) else {}))
    except MarshmallowValidationError as err:
        raise BadRequest(schema.summarize(err.messages), details={"errors": err.messages}) from err


def require_auth(func: F) -> F:
    """
    Reject requests without a valid access-token cookie.

    On success ``g.identity`` holds the :class:`Identity`; on failure the
    wrapped handler never runs.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        token = request.cookies.get(current_app.config["ACCESS_COOKIE_NAME"])
        if not token:
            raise Forbidden(SIGN_IN_REQUIRED)
        try:
            claims = get_token_issuer().decode_access(token)
        except TokenError as exc:
            raise Forbidden(INVALID_TOKEN, error=str(exc)) from exc
        sub = str(claims.get("sub", ""))
        if not sub.isdigit():
            raise Forbidden(INVALID_TOKEN, error="Token subject is not a user id")
        g.identity = Identity(user_id=int(sub), username=claims.get("username"))
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def current_identity() -> Identity:
    """Return the identity stored by :func:`require_auth`."""

    identity = g.get("identity")
    if identity is None:
        raise Forbidden(SIGN_IN_REQUIRED)
    return cast(Identity, identity)


def service_context() -> ServiceContext:
    """Build a :class:`ServiceContext` from the current request."""

    identity = g.get("identity")
    return ServiceContext(
        actor_id=identity.user_id if identity else None,
        actor_username=identity.username if identity else None,
        request_id=g.get("request_id"),
    )


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
