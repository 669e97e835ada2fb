"""Unit tests for :class:`blogapi.models.user.User`."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError

from blogapi.models.user import User
from tests.factories.user import DEFAULT_PASSWORD, UserFactory


class TestUserModel:
    def test_password_is_hashed_and_verifiable(self, session):
        user = UserFactory(password="plain-secret")

        assert user.password_hash != "plain-secret"
        assert user.verify_password("plain-secret")
        assert not user.verify_password("wrong-secret")

    def test_password_is_write_only(self, session):
        user = UserFactory()
        with pytest.raises(AttributeError):
            _ = user.password

    def test_empty_password_rejected(self):
        with pytest.raises(ValueError):
            User(username="bob", name="Bob", email="bob@example.com", password="")

    def test_email_is_normalized(self, session):
        user = UserFactory(email="  Mixed.Case@Example.COM ")
        assert user.email == "mixed.case@example.com"

    @pytest.mark.parametrize("email", ["", "no-at-sign", "user@nodot"])
    def test_invalid_email_rejected(self, email):
        with pytest.raises(ValueError):
            User(username="bob", name="Bob", email=email, password=DEFAULT_PASSWORD)

    def test_username_and_name_are_trimmed(self, session):
        user = UserFactory(username="  carol  ", name="  Carol C. ")
        assert user.username == "carol"
        assert user.name == "Carol C."

    def test_blank_name_rejected(self):
        with pytest.raises(ValueError, match="Name is required"):
            User(username="bob", name="   ", email="bob@example.com", password=DEFAULT_PASSWORD)

    def test_unique_username_enforced(self, session):
        UserFactory(username="dup")
        with pytest.raises(IntegrityError):
            UserFactory(username="dup")
        session.rollback()

    def test_unique_email_enforced(self, session):
        UserFactory(email="dup@example.com")
        with pytest.raises(IntegrityError):
            UserFactory(email="dup@example.com")
        session.rollback()

    def test_timestamps_are_set(self, session):
        user = UserFactory()
        assert user.created_at is not None
        assert user.updated_at is not None
