"""Session cookie helpers for the access/refresh token pair."""

from __future__ import annotations

from datetime import UTC, datetime

from flask import Response, current_app

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def _cookie_specs() -> list[tuple[str, str, int]]:
    """Return ``(name, path, max_age)`` for both session cookies."""
    cfg = current_app.config
    return [
        (cfg["ACCESS_COOKIE_NAME"], cfg["ACCESS_COOKIE_PATH"], int(cfg["ACCESS_COOKIE_MAX_AGE"])),
        (
            cfg["REFRESH_COOKIE_NAME"],
            cfg["REFRESH_COOKIE_PATH"],
            int(cfg["REFRESH_COOKIE_MAX_AGE"]),
        ),
    ]


def set_session_cookies(response: Response, access_token: str, refresh_token: str) -> Response:
    """
    Attach both session cookies to ``response``.

    The access cookie is scoped to the whole API, the refresh cookie to the
    refresh endpoint only. Both are HTTP-only and ``SameSite=Strict``;
    ``Secure`` follows ``AUTH_COOKIE_SECURE``.
    """
    cfg = current_app.config
    (access_name, access_path, access_age), (refresh_name, refresh_path, refresh_age) = (
        _cookie_specs()
    )
    common = {
        "httponly": True,
        "secure": bool(cfg["AUTH_COOKIE_SECURE"]),
        "samesite": cfg["AUTH_COOKIE_SAMESITE"],
    }
    response.set_cookie(access_name, access_token, max_age=access_age, path=access_path, **common)
    response.set_cookie(
        refresh_name, refresh_token, max_age=refresh_age, path=refresh_path, **common
    )
    return response


def clear_session_cookies(response: Response) -> Response:
    """Overwrite both session cookies with empty, already-expired values."""
    cfg = current_app.config
    for name, path, _ in _cookie_specs():
        response.set_cookie(
            name,
            "",
            max_age=0,
            expires=EPOCH,
            path=path,
            httponly=True,
            secure=bool(cfg["AUTH_COOKIE_SECURE"]),
            samesite=cfg["AUTH_COOKIE_SAMESITE"],
        )
    return response


__all__ = ["clear_session_cookies", "set_session_cookies"]
