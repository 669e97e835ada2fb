from __future__ import annotations

from .dto import (
    AuthorOut,
    CommenterOut,
    CommentIn,
    CommentOut,
    PostCreateIn,
    PostListIn,
    PostListOut,
    PostOut,
    PostUpdateIn,
)
from .service import PostService

__all__ = [
    "AuthorOut",
    "CommentIn",
    "CommentOut",
    "CommenterOut",
    "PostCreateIn",
    "PostListIn",
    "PostListOut",
    "PostOut",
    "PostService",
    "PostUpdateIn",
]
