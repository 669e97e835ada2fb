"""Post aggregate: posts with their owned tags and comments."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.ext.associationproxy import AssociationProxy, association_proxy
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from blogapi.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin
from .user import User


def _dedupe(names: Iterable[str]) -> list[str]:
    """Collapse duplicate tag names keeping first-seen order."""
    seen: dict[str, None] = {}
    for name in names:
        if not isinstance(name, str):
            raise ValueError("Tags must be strings.")
        seen.setdefault(name, None)
    return list(seen)


class PostTag(PKMixin, db.Model):
    """A single tag attached to a post. Owned by :class:`Post`."""

    __tablename__ = "post_tags"

    post_id: Mapped[int] = mapped_column(
        ForeignKey("posts.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(64), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        UniqueConstraint("post_id", "name", name="uq_post_tags_post_id_name"),
        Index("ix_post_tags_name", "name"),
    )

    def __init__(self, name: str, position: int = 0) -> None:
        self.name = name
        self.position = position


class Comment(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    A comment appended to a post.

    Comments live and die with their post; they are never edited or removed
    individually. Call order is preserved by the autoincrement ``id``.
    """

    __tablename__ = "comments"

    post_id: Mapped[int] = mapped_column(
        ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    commenter_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)

    commenter: Mapped[User] = relationship(User, lazy="joined")


class Post(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Blog post written by a single author (the original poster).

    Fields
    ------
    title, description, img_url : str
        Required content fields.
    author_id : int
        Owning user. Set once at creation; only this user may mutate the post.
    tags : list[str]
        Set-like list of tag names, proxied over :class:`PostTag` rows.
    comments : list[Comment]
        Append-only, ordered comment thread.
    """

    __tablename__ = "posts"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    img_url: Mapped[str] = mapped_column(String(2048), nullable=False)
    author_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)

    author: Mapped[User] = relationship(User, lazy="joined")
    tag_links: Mapped[list[PostTag]] = relationship(
        PostTag,
        cascade="all, delete-orphan",
        order_by=PostTag.position,
        lazy="selectin",
    )
    comments: Mapped[list[Comment]] = relationship(
        Comment,
        cascade="all, delete-orphan",
        order_by=Comment.id,
        lazy="selectin",
    )

    tags: AssociationProxy[list[str]] = association_proxy(
        "tag_links", "name", creator=lambda name: PostTag(name=name)
    )

    __table_args__ = (Index("ix_posts_created_at", "created_at"),)

    # -------------------- Domain API --------------------
    def set_tags(self, names: Iterable[str]) -> None:
        """
        Replace the tag set, reusing rows for names that stay.

        Reusing rows keeps the ``(post_id, name)`` unique constraint intact
        within a single flush.

        :param names: New tag names; duplicates are collapsed.
        """
        wanted = _dedupe(names)
        existing = {link.name: link for link in self.tag_links}
        links: list[PostTag] = []
        for position, name in enumerate(wanted):
            link = existing.get(name) or PostTag(name=name)
            link.position = position
            links.append(link)
        self.tag_links = links

    def add_comment(self, *, text: str, commenter_id: int) -> Comment:
        """
        Append a comment authored by ``commenter_id``.

        :returns: The staged :class:`Comment`.
        :raises ValueError: If ``text`` is empty.
        """
        if not isinstance(text, str) or not text:
            raise ValueError("Comment text is required")
        comment = Comment(text=text, commenter_id=commenter_id)
        self.comments.append(comment)
        return comment

    # -------------------- Validators --------------------
    @validates("title", "description", "img_url")
    def _require_text(self, key: str, value: str) -> str:
        """Reject non-string content values."""
        if not isinstance(value, str):
            raise ValueError(f"{key} must be a string.")
        return value
