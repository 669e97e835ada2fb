"""Authentication endpoints using the service layer."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from blogapi.api.cookies import clear_session_cookies, set_session_cookies
from blogapi.api.deps import (
    current_identity,
    json_response,
    load_body,
    require_auth,
    service_context,
    timing,
)
from blogapi.core.extensions import get_token_issuer
from blogapi.schemas import LoginSchema, ProfileSchema, RegisterSchema, UserSchema
from blogapi.services.auth import AuthService, LoginIn, RegisterIn

bp = Blueprint("auth", __name__)

register_schema = RegisterSchema()
login_schema = LoginSchema()
user_schema = UserSchema()
profile_schema = ProfileSchema()


def _service() -> AuthService:
    return AuthService(token_provider=get_token_issuer(), ctx=service_context())


@bp.post("/register")
@timing
def register():
    """Create an account, set session cookies and return the public user."""

    data = load_body(register_schema)
    result = _service().register(RegisterIn(**data))
    response = json_response(
        {"message": "User registered successfully", "user": user_schema.dump(result.user)},
        status=201,
    )
    return set_session_cookies(
        response, result.tokens.access_token, result.tokens.refresh_token
    )


@bp.post("/login")
@timing
def login():
    """Authenticate by username-or-email and set session cookies."""

    data = load_body(login_schema)
    result = _service().login(LoginIn(identifier=data["username"], password=data["password"]))
    response = json_response(
        {"message": "User logged in successfully", "user": user_schema.dump(result.user)}
    )
    return set_session_cookies(
        response, result.tokens.access_token, result.tokens.refresh_token
    )


@bp.post("/refresh-token")
@timing
def refresh_token():
    """Rotate the token pair using the refresh cookie."""

    token = request.cookies.get(current_app.config["REFRESH_COOKIE_NAME"])
    tokens = _service().refresh(token)
    response = json_response({"message": "Token refreshed successfully"})
    return set_session_cookies(response, tokens.access_token, tokens.refresh_token)


@bp.get("/user")
@require_auth
@timing
def profile():
    """Return the authenticated user's profile."""

    profile_out = _service().get_profile(current_identity().user_id)
    return json_response(profile_schema.dump(profile_out))


@bp.post("/logout")
@timing
def logout():
    """Clear both session cookies. Tokens themselves are not revoked."""

    response = json_response({"message": "Logged out successfully"})
    return clear_session_cookies(response)
