from blogapi.models.post import Comment, Post, PostTag
from blogapi.models.user import User

__all__ = [
    "Comment",
    "Post",
    "PostTag",
    "User",
]
