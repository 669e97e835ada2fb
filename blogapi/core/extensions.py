"""Global Flask extension instances and initialization helpers."""

from __future__ import annotations

from datetime import timedelta

from flask import Flask, current_app
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import MetaData

from blogapi.core.config import PLACEHOLDER_SECRETS

# Global naming convention for all constraints
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)

# Global singletons (import-safe)
db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
migrate = Migrate(render_as_batch=True)

TOKEN_ISSUER_KEY = "token_issuer"


def init_app(app: Flask) -> None:
    """Initialize SQLAlchemy, migrations, and the JWT token issuer.

    Parameters
    ----------
    app: flask.Flask
        Application used to bind extension instances. This call imports the
        :mod:`blogapi.models` package to ensure SQLAlchemy metadata is ready for
        migrations.

    Raises
    ------
    RuntimeError
        When signing secrets are missing, identical, or left at their
        placeholder values in production.
    """
    db.init_app(app)

    # Ensure models are imported so Alembic sees metadata
    from blogapi import models as _models  # noqa: F401

    migrate.init_app(app, db)

    from blogapi.infra.jwt.jwt_token_issuer import JWTTokenIssuer

    access_secret = app.config.get("ACCESS_TOKEN_SECRET")
    refresh_secret = app.config.get("REFRESH_TOKEN_SECRET")
    if app.config.get("AUTH_COOKIE_SECURE") and (
        access_secret in PLACEHOLDER_SECRETS or refresh_secret in PLACEHOLDER_SECRETS
    ):
        raise RuntimeError("Refusing to start in production with placeholder token secrets.")

    app.extensions[TOKEN_ISSUER_KEY] = JWTTokenIssuer(
        access_secret=access_secret,
        refresh_secret=refresh_secret,
        access_expires=timedelta(seconds=int(app.config["ACCESS_TOKEN_TTL_SECONDS"])),
        refresh_expires=timedelta(seconds=int(app.config["REFRESH_TOKEN_TTL_SECONDS"])),
    )


def get_token_issuer():
    """Return the token issuer bound to the current application."""
    issuer = current_app.extensions.get(TOKEN_ISSUER_KEY)
    if issuer is None:
        raise RuntimeError("Token issuer is not initialized. Call init_app() first.")
    return issuer
