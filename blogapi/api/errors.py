"""Translate service-layer errors into problem+json responses."""

from __future__ import annotations

from typing import cast

from flask import Flask, Response

from blogapi.core.errors import APIError, render_api_error
from blogapi.services._shared.base import BaseService
from blogapi.services._shared.errors import ServiceError


def handle_service_error(err: ServiceError) -> tuple[Response, int]:
    """Map a :class:`ServiceError` through ``BaseService.translate_exceptions``."""
    # Every ServiceError subclass has an APIError counterpart.
    return render_api_error(cast(APIError, BaseService.translate_exceptions(err)))


def init_app(app: Flask) -> None:
    """Register the service error translator on ``app``."""
    app.register_error_handler(ServiceError, handle_service_error)


__all__ = ["handle_service_error", "init_app"]
