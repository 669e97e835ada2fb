"""Common Marshmallow schemas shared across resources."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from marshmallow import EXCLUDE, Schema, fields, post_load, pre_load


def flatten_messages(messages: Any) -> list[str]:
    """Flatten marshmallow's nested ``{field: [msg, ...]}`` structure."""
    if isinstance(messages, str):
        return [messages]
    if isinstance(messages, Mapping):
        out: list[str] = []
        for value in messages.values():
            out.extend(flatten_messages(value))
        return out
    if isinstance(messages, Sequence):
        out = []
        for value in messages:
            out.extend(flatten_messages(value))
        return out
    return [str(messages)]


class RequestSchema(Schema):
    """
    Base for request bodies.

    ``message_priority`` lists client-facing messages in the order they are
    reported when several fields fail at once. With ``blank_is_missing`` set,
    empty strings and nulls count as absent keys.
    """

    message_priority: tuple[str, ...] = ()
    blank_is_missing: bool = True

    class Meta:
        unknown = EXCLUDE

    @pre_load
    def drop_blank(self, data: Any, **_: Any) -> Any:
        if not self.blank_is_missing or not isinstance(data, Mapping):
            return data
        return {k: v for k, v in data.items() if v is not None and v != ""}

    def summarize(self, messages: Any) -> str:
        """Pick the single message shown to clients for a failed load."""
        flat = flatten_messages(messages)
        for candidate in self.message_priority:
            if candidate in flat:
                return candidate
        return flat[0] if flat else "Validation failed"


def _lenient_positive_int(raw: Any, default: int) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    return value if value >= 1 else default


class PaginationQuerySchema(Schema):
    """
    Parse ``page`` and ``limit`` query parameters.

    Non-numeric or non-positive values fall back to the defaults instead of
    failing the request.
    """

    class Meta:
        unknown = EXCLUDE

    page = fields.Raw(load_default=None)
    limit = fields.Raw(load_default=None)

    def __init__(self, *, default_limit: int = 10, **kwargs: Any) -> None:
        self._default_limit = default_limit
        super().__init__(**kwargs)

    @post_load
    def apply_defaults(self, data: dict[str, Any], **_: Any) -> dict[str, int]:
        return {
            "page": _lenient_positive_int(data.get("page"), 1),
            "limit": _lenient_positive_int(data.get("limit"), self._default_limit),
        }


def build_page_payload(
    *, items: list[dict[str, Any]], page: int, total_pages: int, total: int
) -> dict[str, Any]:
    """Return the listing envelope ``{posts, currentPage, totalPages, totalPosts}``."""
    return {
        "posts": items,
        "currentPage": int(page),
        "totalPages": int(total_pages),
        "totalPosts": int(total),
    }
