"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from blogapi.repositories.base import (
    BaseRepository,
    Page,
    Pagination,
    paginate_select,
)
from blogapi.repositories.post import PostRepository
from blogapi.repositories.user import UserRepository

__all__ = [
    # Base
    "BaseRepository",
    "Page",
    "Pagination",
    "paginate_select",
    # Domain
    "PostRepository",
    "UserRepository",
]
