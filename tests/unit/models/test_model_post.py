"""Unit tests for the Post aggregate (tags and comments)."""

from __future__ import annotations

import pytest

from blogapi.models.post import Comment, Post, PostTag
from tests.factories.post import CommentFactory, PostFactory
from tests.factories.user import UserFactory


class TestPostTags:
    def test_tags_preserve_order_and_collapse_duplicates(self, session):
        post = PostFactory(tags=["python", "flask", "python"])
        assert post.tags == ["python", "flask"]

    def test_set_tags_reuses_rows_for_kept_names(self, session):
        post = PostFactory(tags=["a", "b"])
        kept = next(link for link in post.tag_links if link.name == "b")

        post.set_tags(["b", "c"])
        session.commit()

        assert post.tags == ["b", "c"]
        assert any(link is kept for link in post.tag_links)
        assert session.query(PostTag).filter_by(post_id=post.id).count() == 2

    def test_empty_tags_allowed(self, session):
        post = PostFactory(tags=["x"])
        post.set_tags([])
        session.commit()
        assert post.tags == []

    def test_non_string_tag_rejected(self, session):
        post = PostFactory()
        with pytest.raises(ValueError):
            post.set_tags(["ok", 3])


class TestPostComments:
    def test_comments_keep_call_order(self, session):
        post = PostFactory()
        commenter = UserFactory()
        for i in range(4):
            post.add_comment(text=f"comment {i}", commenter_id=commenter.id)
        session.commit()

        session.expire_all()
        assert [c.text for c in post.comments] == [f"comment {i}" for i in range(4)]

    def test_empty_comment_rejected(self, session):
        post = PostFactory()
        with pytest.raises(ValueError, match="Comment text is required"):
            post.add_comment(text="", commenter_id=post.author_id)

    def test_comment_factory_links_commenter(self, session):
        comment = CommentFactory(text="hello")
        assert comment.commenter.id == comment.commenter_id
        assert comment.text == "hello"

    def test_deleting_post_removes_comments_and_tags(self, session):
        post = PostFactory(tags=["gone"])
        post.add_comment(text="bye", commenter_id=post.author_id)
        session.commit()
        post_id = post.id

        session.delete(post)
        session.commit()

        assert session.get(Post, post_id) is None
        assert session.query(Comment).filter_by(post_id=post_id).count() == 0
        assert session.query(PostTag).filter_by(post_id=post_id).count() == 0


class TestPostValidation:
    def test_content_must_be_text(self):
        with pytest.raises(ValueError):
            Post(title=None, description="d", img_url="u", author_id=1)
