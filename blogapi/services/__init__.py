"""Service layer public API.

This package exposes the essential building blocks for the service layer so that
callers can import from :mod:`blogapi.services` without knowing internal structure.

Re-exports
----------
- Base primitives (from ``blogapi.services._shared.base``)
    * :class:`BaseService`
    * :class:`ServiceContext`

- Shared DTOs (from ``blogapi.services._shared.dto``)
    * :class:`PaginationIn`
    * :class:`PageMeta`

- Auth service (from ``blogapi.services.auth``)
    * :class:`AuthService`
    * DTOs: :class:`RegisterIn`, :class:`LoginIn`, :class:`UserPublicOut`,
      :class:`UserProfileOut`, :class:`TokenPairOut`, :class:`AuthResult`

- Post service (from ``blogapi.services.posts``)
    * :class:`PostService`
    * DTOs: :class:`PostCreateIn`, :class:`PostUpdateIn`, :class:`CommentIn`,
      :class:`PostListIn`, :class:`PostOut`, :class:`PostListOut`
"""

from __future__ import annotations

from ._shared.base import BaseService, ServiceContext
from ._shared.dto import PageMeta, PaginationIn
from .auth import (
    AuthResult,
    AuthService,
    LoginIn,
    RegisterIn,
    TokenPairOut,
    UserProfileOut,
    UserPublicOut,
)
from .posts import (
    CommentIn,
    PostCreateIn,
    PostListIn,
    PostListOut,
    PostOut,
    PostService,
    PostUpdateIn,
)

__all__ = [
    # Base
    "BaseService",
    "ServiceContext",
    # Shared DTOs
    "PaginationIn",
    "PageMeta",
    # Auth
    "AuthService",
    "AuthResult",
    "LoginIn",
    "RegisterIn",
    "TokenPairOut",
    "UserProfileOut",
    "UserPublicOut",
    # Posts
    "PostService",
    "CommentIn",
    "PostCreateIn",
    "PostListIn",
    "PostListOut",
    "PostOut",
    "PostUpdateIn",
]
