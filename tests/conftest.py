"""Pytest fixtures: one application and one in-memory SQLite database per test.

Services commit through their units of work, so isolation comes from a fresh
database per test instead of an outer rolled-back transaction.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Generator
from typing import Any

import pytest
from flask import Flask

from blogapi.core.config import TestingConfig
from blogapi.core.extensions import db as _db
from blogapi.core.extensions import get_token_issuer
from blogapi.factory import create_app
from blogapi.models.user import User
from tests.factories import SQLAlchemySession
from tests.factories.user import DEFAULT_PASSWORD, UserFactory
from tests.helpers.auth import login_as


@pytest.fixture()
def app() -> Generator[Flask, None, None]:
    """Create the application with :class:`TestingConfig` and an empty schema.

    Yields
    ------
    flask.Flask
        Application with an app context pushed for the whole test.
    """
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    application = create_app(TestingConfig, instance_relative_config=False)
    with application.app_context():
        _db.create_all()
        yield application
        _db.session.remove()
        _db.drop_all()


@pytest.fixture()
def db(app: Flask):
    """Database extension bound to the testing application."""
    return _db


@pytest.fixture()
def session(db):
    """Flask-scoped session also used by the factories."""
    return db.session


@pytest.fixture(autouse=True)
def _factories_session(request: pytest.FixtureRequest) -> Generator[None, None, None]:
    """Wire Factory Boy to the app session for tests that use the database."""
    if "app" in request.fixturenames:
        SQLAlchemySession.set(request.getfixturevalue("session"))
    yield
    SQLAlchemySession.set(None)


@pytest.fixture()
def client(app: Flask):
    """Return a Flask test client with its own cookie jar."""
    return app.test_client()


@pytest.fixture()
def token_issuer(app: Flask):
    """The application's JWT issuer."""
    return get_token_issuer()


@pytest.fixture()
def user(session) -> User:
    """Persist and return a user whose password is ``DEFAULT_PASSWORD``."""
    return UserFactory()


@pytest.fixture()
def auth_client(app: Flask, user: User):
    """Test client already signed in as ``user`` through the login endpoint."""
    client = app.test_client()
    login_as(client, user.username, DEFAULT_PASSWORD)
    return client


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


@pytest.fixture()
def freeze_time() -> Callable[[str | None], Any]:
    """Factory returning :func:`freezegun.freeze_time`.

    Examples
    --------
    >>> def test_with_frozen_time(freeze_time):
    ...     with freeze_time("2024-01-01"):
    ...         ...
    """

    from freezegun import freeze_time as _freeze_time

    def _factory(target: str | None = None) -> Any:
        return _freeze_time(target or "2024-01-01")

    return _factory
