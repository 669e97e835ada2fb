"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import LoginSchema, ProfileSchema, RegisterSchema, UserSchema
from .common import PaginationQuerySchema, RequestSchema, build_page_payload
from .post import (
    CommentCreateSchema,
    PostCreateSchema,
    PostSchema,
    PostUpdateSchema,
)

__all__ = [
    "LoginSchema",
    "ProfileSchema",
    "RegisterSchema",
    "UserSchema",
    "PaginationQuerySchema",
    "RequestSchema",
    "build_page_payload",
    "CommentCreateSchema",
    "PostCreateSchema",
    "PostSchema",
    "PostUpdateSchema",
]
