"""Unit tests for the request helpers and session cookies."""

from __future__ import annotations

import pytest
from flask import Response, g

from blogapi.api.cookies import clear_session_cookies, set_session_cookies
from blogapi.api.deps import (
    Identity,
    current_identity,
    load_body,
    parse_pagination,
    require_auth,
    service_context,
)
from blogapi.core.errors import BadRequest, Forbidden
from blogapi.schemas import CommentCreateSchema
from blogapi.services._shared.ports import TokenSubject


@require_auth
def _protected():
    return "ran"


class TestRequireAuth:
    def test_missing_cookie(self, app):
        with app.test_request_context("/api/v1/posts"):
            with pytest.raises(Forbidden) as exc:
                _protected()
        assert exc.value.message == "You need to sign in before continuing."

    def test_garbage_cookie(self, app):
        with app.test_request_context("/api/v1/posts", headers={"Cookie": "access_token=junk"}):
            with pytest.raises(Forbidden) as exc:
                _protected()
        assert exc.value.message == "Invalid Token"

    def test_refresh_token_is_not_an_access_token(self, app, token_issuer):
        pair = token_issuer.issue_tokens(TokenSubject(user_id=3, username="c"))
        headers = {"Cookie": f"access_token={pair.refresh_token}"}
        with app.test_request_context("/api/v1/posts", headers=headers):
            with pytest.raises(Forbidden):
                _protected()

    def test_valid_cookie_sets_identity(self, app, token_issuer):
        pair = token_issuer.issue_tokens(TokenSubject(user_id=7, username="grace"))
        headers = {"Cookie": f"access_token={pair.access_token}"}
        with app.test_request_context("/api/v1/posts", headers=headers):
            assert _protected() == "ran"
            assert current_identity() == Identity(user_id=7, username="grace")
            ctx = service_context()
            assert ctx.actor_id == 7
            assert ctx.actor_username == "grace"

    def test_current_identity_without_guard(self, app):
        with app.test_request_context("/"):
            assert g.get("identity") is None
            with pytest.raises(Forbidden):
                current_identity()


class TestPagination:
    @pytest.mark.parametrize(
        "query, expected",
        [
            ("", (1, 10)),
            ("?page=2&limit=5", (2, 5)),
            ("?page=0&limit=-3", (1, 10)),
            ("?page=x&limit=2.5", (1, 10)),
        ],
    )
    def test_parse(self, app, query, expected):
        with app.test_request_context(f"/api/v1/posts{query}"):
            p = parse_pagination()
        assert (p.page, p.limit) == expected


class TestLoadBody:
    def test_summarizes_errors(self, app):
        with app.test_request_context("/", method="POST", json={"text": ""}):
            with pytest.raises(BadRequest) as exc:
                load_body(CommentCreateSchema())
        assert exc.value.message == "Comment text is required"

    def test_non_object_body_treated_as_empty(self, app):
        with app.test_request_context("/", method="POST", json=["text"]):
            with pytest.raises(BadRequest):
                load_body(CommentCreateSchema())


class TestCookies:
    def test_set(self, app):
        with app.test_request_context("/"):
            resp = set_session_cookies(Response(), "AAA", "RRR")
        headers = resp.headers.getlist("Set-Cookie")
        access = next(h for h in headers if h.startswith("access_token="))
        refresh = next(h for h in headers if h.startswith("refresh_token="))

        assert "Path=/api;" in access or access.endswith("Path=/api")
        assert "Max-Age=900" in access
        assert "Path=/api/v1/auth/refresh-token" in refresh
        assert "Max-Age=2592000" in refresh
        for header in (access, refresh):
            assert "HttpOnly" in header
            assert "SameSite=Strict" in header
            assert "Secure" not in header

    def test_clear(self, app):
        with app.test_request_context("/"):
            resp = clear_session_cookies(Response())
        headers = resp.headers.getlist("Set-Cookie")

        assert len(headers) == 2
        for header in headers:
            assert "Max-Age=0" in header
            assert "1970" in header
        assert any(h.startswith("access_token=;") for h in headers)
        assert any(h.startswith("refresh_token=;") for h in headers)
