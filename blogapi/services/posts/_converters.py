from __future__ import annotations

from blogapi.models.base import as_utc
from blogapi.models.post import Comment, Post
from blogapi.repositories.base import Page
from blogapi.services._shared.dto import PageMeta
from blogapi.services.posts.dto import (
    AuthorOut,
    CommenterOut,
    CommentOut,
    PostListOut,
    PostOut,
)


def to_comment_out(comment: Comment) -> CommentOut:
    commenter = comment.commenter
    return CommentOut(
        id=comment.id,
        text=comment.text,
        commenter=CommenterOut(id=commenter.id, username=commenter.username, name=commenter.name),
        created_at=as_utc(comment.created_at),
    )


def to_post_out(post: Post) -> PostOut:
    author = post.author
    return PostOut(
        id=post.id,
        title=post.title,
        description=post.description,
        img_url=post.img_url,
        tags=list(post.tags),
        author=AuthorOut(
            id=author.id, username=author.username, name=author.name, email=author.email
        ),
        comments=[to_comment_out(c) for c in post.comments],
        created_at=as_utc(post.created_at),
        updated_at=as_utc(post.updated_at),
    )


def to_post_list_out(page: Page[Post]) -> PostListOut:
    return PostListOut(
        items=[to_post_out(p) for p in page.items],
        meta=PageMeta(
            page=page.page,
            limit=page.limit,
            total=page.total,
            total_pages=page.total_pages,
        ),
    )
