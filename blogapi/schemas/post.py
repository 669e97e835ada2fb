"""Post resource schemas."""

from __future__ import annotations

from marshmallow import Schema, fields

from .common import RequestSchema

POST_REQUIRED = "Title, description, and image URL are required"
COMMENT_REQUIRED = "Comment text is required"
INVALID_TAGS = "Tags must be a list of strings"

_post_required = {"required": POST_REQUIRED, "null": POST_REQUIRED, "invalid": POST_REQUIRED}
_tags_errors = {"invalid": INVALID_TAGS, "null": INVALID_TAGS}


class PostCreateSchema(RequestSchema):
    """Payload for creating a post. ``imgURL`` maps to ``img_url``."""

    message_priority = (POST_REQUIRED,)

    title = fields.String(required=True, error_messages=_post_required)
    description = fields.String(required=True, error_messages=_post_required)
    img_url = fields.String(data_key="imgURL", required=True, error_messages=_post_required)
    tags = fields.List(
        fields.String(error_messages=_tags_errors),
        load_default=list,
        error_messages=_tags_errors,
    )


class PostUpdateSchema(RequestSchema):
    """
    Partial update payload. Only keys present in the body are returned;
    empty strings and empty lists are kept as real values.
    """

    blank_is_missing = False

    title = fields.String()
    description = fields.String()
    img_url = fields.String(data_key="imgURL")
    tags = fields.List(fields.String(error_messages=_tags_errors), error_messages=_tags_errors)


class CommentCreateSchema(RequestSchema):
    message_priority = (COMMENT_REQUIRED,)

    text = fields.String(
        required=True,
        error_messages={
            "required": COMMENT_REQUIRED,
            "null": COMMENT_REQUIRED,
            "invalid": COMMENT_REQUIRED,
        },
    )


class AuthorSchema(Schema):
    id = fields.Integer(data_key="_id")
    username = fields.String()
    name = fields.String()
    email = fields.String()


class CommenterSchema(Schema):
    id = fields.Integer(data_key="_id")
    username = fields.String()
    name = fields.String()


class CommentSchema(Schema):
    id = fields.Integer(data_key="_id")
    text = fields.String()
    commenter = fields.Nested(CommenterSchema)
    created_at = fields.DateTime(data_key="createdAt")


class PostSchema(Schema):
    """Public representation of a post with author and comment thread."""

    id = fields.Integer(data_key="_id")
    title = fields.String()
    description = fields.String()
    img_url = fields.String(data_key="imgURL")
    tags = fields.List(fields.String())
    author = fields.Nested(AuthorSchema, data_key="OP")
    comments = fields.List(fields.Nested(CommentSchema))
    created_at = fields.DateTime(data_key="createdAt")
    updated_at = fields.DateTime(data_key="updatedAt")
