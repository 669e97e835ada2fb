"""Generic repository base and query utilities for SQLAlchemy 2.x.

This module centralizes persistence-only concerns shared by all repositories:
- Typed pagination input and result pages.
- Safe sorting with a whitelist mapping (prevents SQL injection).
- Deterministic pagination (adds a primary-key tiebreaker).
- Safe update helpers with per-repository updatable-field whitelists.
- No business logic, no commit/rollback. Units of Work own transactions.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar, cast

from sqlalchemy import Select, func, select
from sqlalchemy.orm import InstrumentedAttribute, Session

from blogapi.core.extensions import db

E = TypeVar("E")  # SQLAlchemy mapped entity type

# Cap for LIMIT and OFFSET binds; their sum stays within a signed 64-bit integer
MAX_SQL_INT = 2**62 - 1


# ------------------------------- Pagination ----------------------------------


@dataclass(slots=True)
class Pagination:
    """Pagination input parameters.

    :param page: 1-based page number.
    :type page: int
    :param limit: Page size.
    :type limit: int
    :param sort: Public sort tokens (e.g., ``["-created_at"]``).
    :type sort: list[str]
    """

    page: int
    limit: int
    sort: list[str] = field(default_factory=list)

    @property
    def offset(self) -> int:
        """Rows skipped before the current page: ``(page - 1) * limit``."""
        return (max(self.page, 1) - 1) * max(self.limit, 1)


@dataclass(slots=True)
class Page(Generic[E]):
    """Result page with metadata.

    :param items: Listed entities in the current page.
    :type items: Sequence[E]
    :param total: Total item count for the query.
    :type total: int
    :param page: 1-based current page number.
    :type page: int
    :param limit: Page size.
    :type limit: int
    """

    items: Sequence[E]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        """Number of pages needed to list ``total`` rows (``ceil(total / limit)``)."""
        return math.ceil(self.total / self.limit) if self.limit > 0 else 0


# ----------------------------- Sorting utilities -----------------------------


def parse_sort_tokens(raw: Iterable[str]) -> list[tuple[str, bool]]:
    """Parse public sort tokens into ``(field, is_desc)`` tuples."""
    parsed: list[tuple[str, bool]] = []
    for token in raw:
        is_desc = token.startswith("-")
        name = token[1:] if is_desc else token
        name = name.strip()
        if name:
            parsed.append((name, is_desc))
    return parsed


def _apply_sorting(
    stmt: Select[Any],
    sortable_fields: Mapping[str, InstrumentedAttribute[Any]],
    tokens: Iterable[str],
    *,
    pk_attr: InstrumentedAttribute[Any] | None,
) -> Select[Any]:
    """Apply safe ``ORDER BY`` clauses based on a whitelist mapping.

    Unknown sort tokens are ignored silently. The primary key is appended as a
    final tiebreaker, following the direction of the first sort key, so rows
    sharing a timestamp keep a stable insertion order.
    """
    orders: list[Any] = []
    first_desc: bool | None = None
    for name, is_desc in parse_sort_tokens(tokens):
        col = sortable_fields.get(name)
        if isinstance(col, InstrumentedAttribute):
            orders.append(col.desc() if is_desc else col.asc())
            if first_desc is None:
                first_desc = is_desc

    if orders:
        stmt = stmt.order_by(*orders)

    if pk_attr is not None:
        stmt = stmt.order_by(pk_attr.desc() if first_desc else pk_attr.asc())

    return stmt


# --------------------------- Pagination execution ----------------------------


def paginate_select(
    session: Session,
    stmt: Select[Any],
    *,
    page: int,
    limit: int,
) -> tuple[list[Any], int]:
    """Execute a select with ``LIMIT``/``OFFSET`` and a total count.

    The statement's ``ORDER BY`` is stripped for the ``COUNT``. Offsets and
    limits beyond :data:`MAX_SQL_INT` are clamped, so a page far past the end
    is simply empty.

    :returns: Tuple of ``(items, total)``.
    :rtype: tuple[list[Any], int]
    """
    page = max(int(page), 1)
    limit = min(max(int(limit), 1), MAX_SQL_INT)

    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    total = int(session.execute(count_stmt).scalar_one())

    offset = min((page - 1) * limit, MAX_SQL_INT)
    sliced = stmt.limit(limit).offset(offset)
    items = list(session.execute(sliced).unique().scalars().all())
    return items, total


# ------------------------------ Base repository ------------------------------


class BaseRepository(Generic[E]):
    """Generic, persistence-only repository for a single aggregate.

    Subclasses MUST define ``model``. They MAY override ``_sortable_fields``,
    ``_default_eagerload`` and ``_updatable_fields``.

    This class never opens, commits or rolls back transactions.
    """

    #: SQLAlchemy mapped model (must be set by subclasses)
    model: type[E]

    def __init__(self, session: Session | None = None) -> None:
        self._session: Session | None = session

    @property
    def session(self) -> Session:
        """Return the injected session, or the Flask-scoped one."""
        if self._session is not None:
            return self._session
        return cast(Session, db.session)

    # ------------------------------ Extensibility ----------------------------

    def _default_eagerload(self, stmt: Select[Any]) -> Select[Any]:
        return stmt

    def _pk_attr(self) -> InstrumentedAttribute[Any] | None:
        return getattr(self.model, "id", None)

    def _sortable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        return {}

    def _updatable_fields(self) -> set[str]:
        """Whitelist of keys :meth:`assign_updates` may set. Empty means none."""
        return set()

    # --------------------------------- CRUD ----------------------------------

    def add(self, instance: E) -> E:
        """Stage a new entity and flush to materialize its primary key."""
        self.session.add(instance)
        self.flush()
        return instance

    def get(self, entity_id: Any) -> E | None:
        """Retrieve a single entity by primary key, or ``None``."""
        pk_attr = self._pk_attr()
        if pk_attr is None:
            raise RuntimeError("BaseRepository.get requires a detectable PK attribute.")
        stmt = self._default_eagerload(select(self.model).where(pk_attr == entity_id))
        result = self.session.execute(stmt).unique().scalars().first()
        return cast(E | None, result)

    def delete(self, instance: E) -> None:
        """Hard-delete an entity and flush."""
        self.session.delete(instance)
        self.flush()

    def flush(self) -> None:
        self.session.flush()

    # ----------------------------- Safe updates -------------------------------

    def assign_updates(
        self,
        instance: E,
        fields: Mapping[str, Any],
        *,
        flush: bool = True,
    ) -> E:
        """Assign whitelisted keys to ``instance`` via ``setattr``.

        ``setattr`` keeps SQLAlchemy ``@validates`` hooks in play. Keys absent
        from ``fields`` are left untouched.

        :raises ValueError: On keys outside :meth:`_updatable_fields`.
        """
        allowed = self._updatable_fields()
        unknown = sorted(k for k in fields if k not in allowed)
        if unknown:
            raise ValueError(f"Unknown or non-updatable fields: {unknown}")
        for key, value in fields.items():
            setattr(instance, key, value)
        if flush:
            self.flush()
        return instance

    # ------------------------------- Listing ---------------------------------

    def paginate(
        self,
        pagination: Pagination,
        *,
        where: Sequence[Any] = (),
    ) -> Page[E]:
        """Paginate entities matching ``where`` clauses with stable sorting."""
        stmt: Select[Any] = select(self.model)
        if where:
            stmt = stmt.where(*where)
        stmt = self._default_eagerload(stmt)
        stmt = _apply_sorting(
            stmt, self._sortable_fields(), pagination.sort, pk_attr=self._pk_attr()
        )

        raw_items, total = paginate_select(
            self.session,
            stmt,
            page=pagination.page,
            limit=pagination.limit,
        )
        return Page(
            items=cast(list[E], raw_items),
            total=total,
            page=pagination.page,
            limit=pagination.limit,
        )
