"""Unit tests for :class:`AuthService` using the stub token provider."""

from __future__ import annotations

from dataclasses import asdict

import pytest
from sqlalchemy.exc import OperationalError

from blogapi.models.user import User
from blogapi.services._shared.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    PersistenceError,
)
from blogapi.services._shared.ports import StubTokenProvider
from blogapi.services.auth import AuthService, LoginIn, RegisterIn
from tests.factories.user import DEFAULT_PASSWORD, UserFactory


@pytest.fixture()
def tokens() -> StubTokenProvider:
    return StubTokenProvider()


@pytest.fixture()
def service(app, tokens) -> AuthService:
    return AuthService(token_provider=tokens)


def _register_in(**overrides: str) -> RegisterIn:
    data = {
        "username": "nora",
        "name": "Nora N.",
        "email": "nora@example.com",
        "password": "long-enough",
    }
    data.update(overrides)
    return RegisterIn(**data)


class TestRegister:
    def test_returns_public_user_and_tokens(self, service, tokens, session):
        result = service.register(_register_in())

        assert set(asdict(result.user)) == {"id", "username", "name", "email"}
        assert result.user.username == "nora"
        assert tokens.decode_access(result.tokens.access_token)["username"] == "nora"
        assert tokens.decode_refresh(result.tokens.refresh_token)["sub"] == str(result.user.id)

    def test_stores_hash_not_plaintext(self, service, session):
        result = service.register(_register_in())
        stored = session.get(User, result.user.id)
        assert stored.password_hash != "long-enough"
        assert stored.verify_password("long-enough")

    def test_duplicate_username(self, service, session):
        UserFactory(username="nora")
        with pytest.raises(ConflictError, match="Username already exists"):
            service.register(_register_in())

    def test_duplicate_email(self, service, session):
        UserFactory(email="nora@example.com")
        with pytest.raises(ConflictError, match="Email already exists"):
            service.register(_register_in())

    def test_duplicate_email_ignores_case(self, service, session):
        UserFactory(email="nora@example.com")
        with pytest.raises(ConflictError, match="Email already exists"):
            service.register(_register_in(email="NORA@Example.com"))

    def test_one_user_matching_both_reports_username(self, service, session):
        UserFactory(username="nora", email="nora@example.com")
        with pytest.raises(ConflictError, match="Username already exists"):
            service.register(_register_in())

    def test_two_users_colliding_report_the_oldest_match(self, service, session):
        UserFactory(username="owns-email", email="nora@example.com")
        UserFactory(username="nora", email="other@example.com")
        with pytest.raises(ConflictError, match="Email already exists"):
            service.register(_register_in())

    def test_store_failure_becomes_persistence_error(self, service, session, monkeypatch):
        def _boom(*args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("database is locked"))

        monkeypatch.setattr(
            "blogapi.repositories.user.UserRepository.find_by_username_or_email", _boom
        )
        with pytest.raises(PersistenceError) as info:
            service.register(_register_in())
        assert info.value.message == "Error registering user"
        assert "database is locked" in info.value.reason


class TestLogin:
    def test_by_username(self, service, session):
        user = UserFactory(username="otto")
        result = service.login(LoginIn(identifier="otto", password=DEFAULT_PASSWORD))
        assert result.user.id == user.id

    def test_by_email(self, service, session):
        user = UserFactory(email="otto@example.com")
        result = service.login(LoginIn(identifier="otto@example.com", password=DEFAULT_PASSWORD))
        assert result.user.id == user.id

    def test_wrong_password_and_unknown_user_fail_identically(self, service, session):
        UserFactory(username="otto")
        with pytest.raises(AuthenticationError) as wrong:
            service.login(LoginIn(identifier="otto", password="bad-password"))
        with pytest.raises(AuthenticationError) as unknown:
            service.login(LoginIn(identifier="ghost", password=DEFAULT_PASSWORD))
        assert str(wrong.value) == str(unknown.value) == "Invalid credentials."


class TestRefresh:
    def test_missing_token(self, service):
        with pytest.raises(AuthenticationError, match="No refresh token provided"):
            service.refresh(None)

    def test_invalid_token_carries_reason(self, service, tokens, session):
        user = UserFactory()
        pair = service.login(LoginIn(identifier=user.username, password=DEFAULT_PASSWORD)).tokens
        tokens.expire(pair.refresh_token)

        with pytest.raises(AuthenticationError, match="Invalid refresh token") as info:
            service.refresh(pair.refresh_token)
        assert info.value.reason == "jwt expired"

    def test_access_token_is_not_a_refresh_token(self, service, session):
        user = UserFactory()
        pair = service.login(LoginIn(identifier=user.username, password=DEFAULT_PASSWORD)).tokens
        with pytest.raises(AuthenticationError, match="Invalid refresh token"):
            service.refresh(pair.access_token)

    def test_deleted_user(self, service, session):
        user = UserFactory()
        pair = service.login(LoginIn(identifier=user.username, password=DEFAULT_PASSWORD)).tokens
        session.delete(user)
        session.commit()

        with pytest.raises(AuthenticationError, match="User not found"):
            service.refresh(pair.refresh_token)

    def test_rotates_pair(self, service, tokens, session):
        user = UserFactory()
        old = service.login(LoginIn(identifier=user.username, password=DEFAULT_PASSWORD)).tokens

        new = service.refresh(old.refresh_token)

        assert new.access_token != old.access_token
        assert new.refresh_token != old.refresh_token
        assert tokens.decode_access(new.access_token)["sub"] == str(user.id)
        # No revocation list: the old refresh token still verifies.
        assert tokens.decode_refresh(old.refresh_token)


class TestProfile:
    def test_returns_profile(self, service, session):
        user = UserFactory(username="pia")
        profile = service.get_profile(user.id)
        assert profile.username == "pia"
        assert profile.created_at is not None
        assert "password" not in asdict(profile)
        assert "password_hash" not in asdict(profile)

    def test_missing_user(self, service, session):
        with pytest.raises(NotFoundError, match="User not found"):
            service.get_profile(9999)
