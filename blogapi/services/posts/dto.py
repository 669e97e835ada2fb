"""
DTOs for PostService.

Outputs are detached projections of the Post aggregate, built while the
unit of work is still open so serializers never touch the ORM.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime

from blogapi.services._shared.dto import PageMeta, PaginationIn

# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class PostCreateIn:
    """
    Input DTO for post creation.

    :param title: Post title (non-empty).
    :param description: Post body (non-empty).
    :param img_url: Cover image URL (non-empty).
    :param tags: Tag names; duplicates are collapsed.
    """

    title: str
    description: str
    img_url: str
    tags: Sequence[str] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class PostUpdateIn:
    """
    Partial update. ``None`` means "not supplied"; an empty string or an
    empty ``tags`` sequence is a real overwrite.
    """

    title: str | None = None
    description: str | None = None
    img_url: str | None = None
    tags: Sequence[str] | None = None

    def scalar_changes(self) -> dict[str, str]:
        """Return the supplied scalar fields keyed by model attribute."""
        candidates = {
            "title": self.title,
            "description": self.description,
            "img_url": self.img_url,
        }
        return {k: v for k, v in candidates.items() if v is not None}


@dataclass(frozen=True, slots=True)
class CommentIn:
    """Input DTO for appending a comment."""

    text: str


@dataclass(frozen=True, slots=True)
class PostListIn:
    """Listing filters plus pagination. At most one filter is set."""

    pagination: PaginationIn = field(default_factory=PaginationIn)
    tag: str | None = None
    author_id: int | None = None


# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class AuthorOut:
    """Public fields of a post's author."""

    id: int
    username: str
    name: str
    email: str


@dataclass(frozen=True, slots=True)
class CommenterOut:
    """Public fields of a comment's author."""

    id: int
    username: str
    name: str


@dataclass(frozen=True, slots=True)
class CommentOut:
    id: int
    text: str
    commenter: CommenterOut
    created_at: datetime


@dataclass(frozen=True, slots=True)
class PostOut:
    """Post aggregate with author, tags and ordered comments."""

    id: int
    title: str
    description: str
    img_url: str
    tags: list[str]
    author: AuthorOut
    comments: list[CommentOut]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True, slots=True)
class PostListOut:
    """Paginated listing of posts with metadata."""

    items: list[PostOut]
    meta: PageMeta
