"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate

from .common import RequestSchema

REQUIRED_FIELDS = "Please provide all required fields."
INVALID_EMAIL = "Please provide a valid email address."
SHORT_PASSWORD = "Password must be at least 8 characters long."

EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"

_required = {"required": REQUIRED_FIELDS, "null": REQUIRED_FIELDS, "invalid": REQUIRED_FIELDS}


class RegisterSchema(RequestSchema):
    """Input payload for account registration."""

    message_priority = (REQUIRED_FIELDS, INVALID_EMAIL, SHORT_PASSWORD)

    username = fields.String(required=True, error_messages=_required)
    name = fields.String(required=True, error_messages=_required)
    email = fields.String(
        required=True,
        error_messages=_required,
        validate=validate.Regexp(EMAIL_PATTERN, error=INVALID_EMAIL),
    )
    password = fields.String(
        required=True,
        error_messages=_required,
        validate=validate.Length(min=8, error=SHORT_PASSWORD),
    )


class LoginSchema(RequestSchema):
    """Input payload for authenticating a user by username or email."""

    message_priority = (REQUIRED_FIELDS,)

    username = fields.String(required=True, error_messages=_required)
    password = fields.String(required=True, error_messages=_required)


class UserSchema(Schema):
    """Public representation of a user returned by register/login."""

    id = fields.Integer(data_key="_id")
    username = fields.String()
    name = fields.String()
    email = fields.String()


class ProfileSchema(UserSchema):
    """Authenticated user's profile."""

    created_at = fields.DateTime(data_key="createdAt")
    updated_at = fields.DateTime(data_key="updatedAt")
