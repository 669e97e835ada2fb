"""Post repository: listing, filtering and eager loading for posts."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import Select
from sqlalchemy.orm import InstrumentedAttribute, joinedload, selectinload

from blogapi.models.post import Comment, Post, PostTag
from blogapi.repositories.base import BaseRepository, Page, Pagination

NEWEST_FIRST = ["-created_at"]


class PostRepository(BaseRepository[Post]):
    """Persist :class:`Post` aggregates (post + tags + comments).

    Listings are always newest-first and load author, tags, comments and
    commenters up front, so serializers never trigger lazy loads.
    """

    model = Post

    def _sortable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        return {
            "created_at": Post.created_at,
            "updated_at": Post.updated_at,
            "title": Post.title,
        }

    def _updatable_fields(self) -> set[str]:
        return {"title", "description", "img_url"}

    def _default_eagerload(self, stmt: Select[Any]) -> Select[Any]:
        return stmt.options(
            joinedload(Post.author),
            selectinload(Post.tag_links),
            selectinload(Post.comments).joinedload(Comment.commenter),
        )

    # ------------------------------- Listing ---------------------------------

    def list_recent(self, pagination: Pagination) -> Page[Post]:
        """Return a newest-first page across all posts."""
        return self.paginate(self._newest_first(pagination))

    def list_by_tag(self, tag: str, pagination: Pagination) -> Page[Post]:
        """Return a newest-first page of posts carrying ``tag``."""
        return self.paginate(
            self._newest_first(pagination),
            where=[Post.tag_links.any(PostTag.name == tag)],
        )

    def list_by_author(self, author_id: int, pagination: Pagination) -> Page[Post]:
        """Return a newest-first page of posts written by ``author_id``."""
        return self.paginate(
            self._newest_first(pagination),
            where=[Post.author_id == author_id],
        )

    @staticmethod
    def _newest_first(pagination: Pagination) -> Pagination:
        return Pagination(page=pagination.page, limit=pagination.limit, sort=list(NEWEST_FIRST))
