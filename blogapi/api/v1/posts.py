"""Post endpoints. Every route requires the access cookie."""

from __future__ import annotations

from flask import Blueprint

from blogapi.api.deps import (
    json_response,
    load_body,
    parse_pagination,
    require_auth,
    service_context,
    timing,
)
from blogapi.schemas import (
    CommentCreateSchema,
    PostCreateSchema,
    PostSchema,
    PostUpdateSchema,
    build_page_payload,
)
from blogapi.services.posts import (
    CommentIn,
    PostCreateIn,
    PostListIn,
    PostListOut,
    PostService,
    PostUpdateIn,
)

bp = Blueprint("posts", __name__)

post_schema = PostSchema()
post_list_schema = PostSchema(many=True)
post_create_schema = PostCreateSchema()
post_update_schema = PostUpdateSchema()
comment_create_schema = CommentCreateSchema()


def _service() -> PostService:
    return PostService(ctx=service_context())


def _page_response(result: PostListOut):
    return json_response(
        build_page_payload(
            items=post_list_schema.dump(result.items),
            page=result.meta.page,
            total_pages=result.meta.total_pages,
            total=result.meta.total,
        )
    )


@bp.post("")
@require_auth
@timing
def create_post():
    """Create a post authored by the caller."""

    data = load_body(post_create_schema)
    post = _service().create(PostCreateIn(**data))
    return json_response(
        {"message": "Post created successfully", "post": post_schema.dump(post)}, status=201
    )


@bp.get("")
@require_auth
@timing
def list_posts():
    """Return a newest-first page of posts."""

    result = _service().list_posts(PostListIn(pagination=parse_pagination()))
    return _page_response(result)


@bp.get("/<int:post_id>")
@require_auth
@timing
def get_post(post_id: int):
    """Return a single post with author and comments."""

    return json_response(post_schema.dump(_service().get_by_id(post_id)))


@bp.put("/<int:post_id>")
@require_auth
@timing
def update_post(post_id: int):
    """Apply a partial update. Author only; checked before the body is validated."""

    service = _service()
    service.authorize_update(post_id)
    data = load_body(post_update_schema)
    post = service.update(post_id, PostUpdateIn(**data))
    return json_response({"message": "Post updated successfully", "post": post_schema.dump(post)})


@bp.delete("/<int:post_id>")
@require_auth
@timing
def delete_post(post_id: int):
    """Delete a post with its comments. Author only."""

    _service().delete(post_id)
    return json_response({"message": "Post deleted successfully"})


@bp.post("/<int:post_id>/comments")
@require_auth
@timing
def add_comment(post_id: int):
    """Append a comment by the caller."""

    data = load_body(comment_create_schema)
    post = _service().add_comment(post_id, CommentIn(text=data["text"]))
    return json_response(
        {"message": "Comment added successfully", "post": post_schema.dump(post)}, status=201
    )


@bp.get("/tags/<tag>")
@require_auth
@timing
def list_posts_by_tag(tag: str):
    """Return a newest-first page of posts carrying ``tag``."""

    return _page_response(_service().list_by_tag(tag, parse_pagination()))


@bp.get("/user/<int:user_id>")
@require_auth
@timing
def list_posts_by_user(user_id: int):
    """Return a newest-first page of posts written by ``user_id``."""

    return _page_response(_service().list_by_user(user_id, parse_pagination()))
