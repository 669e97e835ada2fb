"""
PostService
===========

Application service for the ``Post`` aggregate: CRUD, comment append and
filtered listings. Only the author may update or delete a post; any
authenticated user may comment.
"""

from __future__ import annotations

import logging

from blogapi.models.base import utcnow
from blogapi.models.post import Post
from blogapi.repositories.post import PostRepository
from blogapi.services._shared.base import BaseService
from blogapi.services._shared.dto import PaginationIn
from blogapi.services._shared.errors import NotFoundError, ValidationError
from blogapi.services.posts._converters import to_post_list_out, to_post_out
from blogapi.services.posts.dto import (
    CommentIn,
    PostCreateIn,
    PostListIn,
    PostListOut,
    PostOut,
    PostUpdateIn,
)

log = logging.getLogger(__name__)

REQUIRED_FIELDS_MSG = "Title, description, and image URL are required"
COMMENT_REQUIRED_MSG = "Comment text is required"
UPDATE_FORBIDDEN_MSG = "Not authorized to update this post"


def _blank(value: object) -> bool:
    return not isinstance(value, str) or not value


class PostService(BaseService):
    """
    Responsibilities
    ----------------
    - Create posts authored by the current actor.
    - Newest-first paginated listings (all, by tag, by author).
    - Author-only update/delete (404 is reported before 403).
    - Append comments from any authenticated actor.
    """

    def _require_post(self, repo: PostRepository, post_id: int) -> Post:
        post = repo.get(post_id)
        if post is None:
            raise NotFoundError("Post", post_id)
        return post

    # ------------------------------------------------------------------ #
    # Commands
    # ------------------------------------------------------------------ #

    def create(self, dto: PostCreateIn) -> PostOut:
        """
        Create a post owned by ``ctx.actor_id``.

        :raises ValidationError: When title, description or image URL is blank.
        """
        if _blank(dto.title) or _blank(dto.description) or _blank(dto.img_url):
            raise ValidationError(REQUIRED_FIELDS_MSG)

        with self.store_errors("Error creating post"), self.rw_uow() as uow:
            repo: PostRepository = uow.posts
            post = Post(
                title=dto.title,
                description=dto.description,
                img_url=dto.img_url,
                author_id=self.ctx.actor_id,
            )
            post.set_tags(dto.tags)
            repo.add(post)
            out = to_post_out(self._require_post(repo, post.id))

        log.info("post.create", extra={"post_id": out.id, "user_id": self.ctx.actor_id})
        return out

    def authorize_update(self, post_id: int) -> None:
        """
        Check that the post exists and the actor wrote it, without a payload.

        Callers run this before validating the update body, so a non-author
        gets 403 whatever the body holds.

        :raises NotFoundError: Unknown post.
        :raises AuthorizationError: Actor is not the author.
        """
        with self.store_errors("Error updating post"), self.ro_uow() as uow:
            post = self._require_post(uow.posts, post_id)
            self.ensure_owner(self.ctx.actor_id, post.author_id, msg=UPDATE_FORBIDDEN_MSG)

    def update(self, post_id: int, dto: PostUpdateIn) -> PostOut:
        """
        Apply the supplied fields to a post.

        :raises NotFoundError: Unknown post.
        :raises AuthorizationError: Actor is not the author.
        """
        with self.store_errors("Error updating post"), self.rw_uow() as uow:
            repo: PostRepository = uow.posts
            post = self._require_post(repo, post_id)
            self.ensure_owner(self.ctx.actor_id, post.author_id, msg=UPDATE_FORBIDDEN_MSG)

            repo.assign_updates(post, dto.scalar_changes(), flush=False)
            if dto.tags is not None:
                post.set_tags(dto.tags)
            post.updated_at = utcnow()
            repo.flush()
            out = to_post_out(post)

        log.info("post.update", extra={"post_id": post_id, "user_id": self.ctx.actor_id})
        return out

    def delete(self, post_id: int) -> None:
        """
        Hard-delete a post together with its comments and tags.

        :raises NotFoundError: Unknown post.
        :raises AuthorizationError: Actor is not the author.
        """
        with self.store_errors("Error deleting post"), self.rw_uow() as uow:
            repo: PostRepository = uow.posts
            post = self._require_post(repo, post_id)
            self.ensure_owner(
                self.ctx.actor_id, post.author_id, msg="Not authorized to delete this post"
            )
            repo.delete(post)

        log.info("post.delete", extra={"post_id": post_id, "user_id": self.ctx.actor_id})

    def add_comment(self, post_id: int, dto: CommentIn) -> PostOut:
        """
        Append a comment by the current actor.

        :raises ValidationError: Blank text.
        :raises NotFoundError: Unknown post.
        """
        if _blank(dto.text):
            raise ValidationError(COMMENT_REQUIRED_MSG)

        with self.store_errors("Error adding comment"), self.rw_uow() as uow:
            repo: PostRepository = uow.posts
            post = self._require_post(repo, post_id)
            post.add_comment(text=dto.text, commenter_id=self.ctx.actor_id)
            repo.flush()
            out = to_post_out(post)

        log.info("post.comment", extra={"post_id": post_id, "user_id": self.ctx.actor_id})
        return out

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    def get_by_id(self, post_id: int) -> PostOut:
        """:raises NotFoundError: Unknown post."""
        with self.store_errors("Error fetching post"), self.ro_uow() as uow:
            return to_post_out(self._require_post(uow.posts, post_id))

    def list_posts(self, dto: PostListIn | None = None) -> PostListOut:
        """
        Newest-first page of posts, optionally filtered by tag or author.

        Page count is ``ceil(total / limit)``; a page past the end is empty.
        """
        dto = dto or PostListIn()
        pagination = self.ensure_pagination(page=dto.pagination.page, limit=dto.pagination.limit)

        if dto.tag is not None:
            message = "Error fetching posts by tag"
        elif dto.author_id is not None:
            message = "Error fetching user posts"
        else:
            message = "Error fetching posts"

        with self.store_errors(message), self.ro_uow() as uow:
            repo: PostRepository = uow.posts
            if dto.tag is not None:
                page = repo.list_by_tag(dto.tag, pagination)
            elif dto.author_id is not None:
                page = repo.list_by_author(dto.author_id, pagination)
            else:
                page = repo.list_recent(pagination)
            return to_post_list_out(page)

    def list_by_tag(self, tag: str, pagination: PaginationIn | None = None) -> PostListOut:
        return self.list_posts(PostListIn(pagination=pagination or PaginationIn(), tag=tag))

    def list_by_user(self, user_id: int, pagination: PaginationIn | None = None) -> PostListOut:
        return self.list_posts(
            PostListIn(pagination=pagination or PaginationIn(), author_id=user_id)
        )
