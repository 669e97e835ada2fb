"""Health check endpoint."""

from __future__ import annotations

from flask import Blueprint

from blogapi.api.deps import json_response, timing

bp = Blueprint("health", __name__)


@bp.get("/health")
@timing
def healthcheck():
    """Liveness probe; does not touch the database."""

    return json_response({"status": "ok"})
