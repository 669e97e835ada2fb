"""Unit tests for request schemas and their client-facing messages."""

from __future__ import annotations

import pytest
from marshmallow import ValidationError

from blogapi.schemas import (
    CommentCreateSchema,
    LoginSchema,
    PaginationQuerySchema,
    PostCreateSchema,
    PostUpdateSchema,
    RegisterSchema,
)
from blogapi.schemas.auth import INVALID_EMAIL, REQUIRED_FIELDS, SHORT_PASSWORD

VALID_REGISTER = {
    "username": "quinn",
    "name": "Quinn",
    "email": "quinn@example.com",
    "password": "12345678",
}


def summary(schema, payload) -> str:
    with pytest.raises(ValidationError) as info:
        schema.load(payload)
    return schema.summarize(info.value.messages)


class TestRegisterSchema:
    def test_valid(self):
        assert RegisterSchema().load(VALID_REGISTER) == VALID_REGISTER

    @pytest.mark.parametrize("field", ["username", "name", "email", "password"])
    def test_missing_or_empty_field(self, field):
        missing = {k: v for k, v in VALID_REGISTER.items() if k != field}
        empty = {**VALID_REGISTER, field: ""}
        assert summary(RegisterSchema(), missing) == REQUIRED_FIELDS
        assert summary(RegisterSchema(), empty) == REQUIRED_FIELDS

    @pytest.mark.parametrize("email", ["plain", "a@b", "a b@c.d", "@c.d"])
    def test_bad_email(self, email):
        assert summary(RegisterSchema(), {**VALID_REGISTER, "email": email}) == INVALID_EMAIL

    def test_short_password(self):
        payload = {**VALID_REGISTER, "password": "1234567"}
        assert summary(RegisterSchema(), payload) == SHORT_PASSWORD

    def test_missing_field_reported_before_bad_email(self):
        payload = {**VALID_REGISTER, "email": "bad", "name": ""}
        assert summary(RegisterSchema(), payload) == REQUIRED_FIELDS

    def test_bad_email_reported_before_short_password(self):
        payload = {**VALID_REGISTER, "email": "bad", "password": "short"}
        assert summary(RegisterSchema(), payload) == INVALID_EMAIL

    def test_unknown_keys_ignored(self):
        assert "role" not in RegisterSchema().load({**VALID_REGISTER, "role": "admin"})


class TestLoginSchema:
    def test_requires_both(self):
        assert summary(LoginSchema(), {"username": "x"}) == REQUIRED_FIELDS
        assert summary(LoginSchema(), {"password": "x"}) == REQUIRED_FIELDS


class TestPostSchemas:
    def test_create_maps_img_url_and_defaults_tags(self):
        data = PostCreateSchema().load({"title": "T", "description": "D", "imgURL": "u"})
        assert data == {"title": "T", "description": "D", "img_url": "u", "tags": []}

    def test_create_requires_content(self):
        msg = summary(PostCreateSchema(), {"title": "T", "description": "", "imgURL": "u"})
        assert msg == "Title, description, and image URL are required"

    def test_update_keeps_only_supplied_keys(self):
        assert PostUpdateSchema().load({"title": "new"}) == {"title": "new"}

    def test_update_keeps_empty_values(self):
        data = PostUpdateSchema().load({"description": "", "tags": []})
        assert data == {"description": "", "tags": []}

    def test_update_rejects_non_list_tags(self):
        with pytest.raises(ValidationError):
            PostUpdateSchema().load({"tags": "a,b"})

    def test_comment_requires_text(self):
        assert summary(CommentCreateSchema(), {"text": ""}) == "Comment text is required"
        assert summary(CommentCreateSchema(), {}) == "Comment text is required"


class TestPaginationQuerySchema:
    @pytest.mark.parametrize(
        "args, expected",
        [
            ({}, {"page": 1, "limit": 10}),
            ({"page": "3", "limit": "5"}, {"page": 3, "limit": 5}),
            ({"page": "abc", "limit": "x"}, {"page": 1, "limit": 10}),
            ({"page": "0", "limit": "-4"}, {"page": 1, "limit": 10}),
        ],
    )
    def test_lenient_defaults(self, args, expected):
        assert PaginationQuerySchema().load(args) == expected
