"""
SQLAlchemy implementation of UnitOfWork for Flask.
"""

from __future__ import annotations

from contextlib import suppress

from flask import current_app
from sqlalchemy import event, text
from sqlalchemy.exc import InvalidRequestError, SQLAlchemyError
from sqlalchemy.orm import Session, SessionTransaction, scoped_session

from blogapi.core.extensions import db
from blogapi.repositories import PostRepository, UserRepository
from blogapi.uow.base import UnitOfWork


class SQLAlchemyRepositoryContainer:
    """Provide repository instances that share a SQLAlchemy session."""

    def __init__(self, *, session: Session) -> None:
        self.session = session
        self.users = UserRepository(session=self.session)
        self.posts = PostRepository(session=self.session)


class SQLAlchemyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    SQLAlchemy-backed UoW using the Flask-scoped session.

    Commits when the block exits cleanly, rolls back otherwise.
    """

    def __init__(self) -> None:
        super().__init__(session=db.session)

    def __enter__(self) -> SQLAlchemyUnitOfWork:
        # The session begins lazily on first use.
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            try:
                self.commit()
            except Exception:
                self.rollback()
                raise
        else:
            self.rollback()

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


class SQLAlchemyReadOnlyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    Read-only Unit of Work backed by the Flask-scoped SQLAlchemy session.

    - Blocks ORM flushes carrying new/dirty/deleted objects.
    - Applies ``SET TRANSACTION READ ONLY`` on PostgreSQL/MySQL when it owns
      the transaction.
    - Rolls back on exit when it owns the transaction; ``commit()`` raises.

    If a transaction is already running on the session (e.g. test fixtures),
    the scope attaches to it and only the flush guard applies.
    """

    _READONLY_DIALECTS = ("postgresql", "mysql", "mariadb")

    def __init__(self, *, enforce_db_readonly: bool = True) -> None:
        super().__init__(session=db.session)
        self.enforce_db_readonly = enforce_db_readonly
        self._txn_ctx: SessionTransaction | None = None
        self._guard_installed = False
        self._guard_session: Session | None = None

    def __enter__(self) -> SQLAlchemyReadOnlyUnitOfWork:
        self._txn_ctx = None
        try:
            txn_ctx = self.session.begin()
            txn_ctx.__enter__()
            self._txn_ctx = txn_ctx
        except InvalidRequestError:
            # Already inside a transaction: attach instead of owning it.
            pass

        self._install_guard()

        if self._txn_ctx is not None and self.enforce_db_readonly:
            dialect = self.session.get_bind().dialect.name
            if dialect in self._READONLY_DIALECTS:
                try:
                    self.session.execute(text("SET TRANSACTION READ ONLY"))
                except SQLAlchemyError as exc:
                    current_app.logger.warning(
                        "SET TRANSACTION READ ONLY failed (%s). Falling back to guard only.", exc
                    )
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if self._txn_ctx is not None:
                with suppress(SQLAlchemyError):
                    self.session.rollback()
                try:
                    self._txn_ctx.__exit__(exc_type, exc, tb)
                finally:
                    self._txn_ctx = None
        finally:
            self._remove_guard()

    def commit(self) -> None:
        """
        Disallow commit in read-only Unit of Work.

        :raises RuntimeError: always, to prevent accidental writes.
        """
        raise RuntimeError("Read-only UnitOfWork does not allow commit().")

    def rollback(self) -> None:
        self.session.rollback()

    # ----------------------------- Guard ---------------------------------

    def _before_flush(self, session, flush_context, instances) -> None:
        if session.new or session.dirty or session.deleted:
            raise RuntimeError(
                "Read-only UnitOfWork: ORM flush blocked (new/dirty/deleted objects present)."
            )

    def _guard_target(self) -> Session:
        # Listen on this thread's Session, not the shared scoped factory.
        if isinstance(self.session, scoped_session):
            return self.session()
        return self.session

    def _install_guard(self) -> None:
        if self._guard_installed:
            return
        self._guard_session = self._guard_target()
        event.listen(self._guard_session, "before_flush", self._before_flush)
        self._guard_installed = True

    def _remove_guard(self) -> None:
        if not self._guard_installed:
            return
        with suppress(InvalidRequestError):
            event.remove(self._guard_session, "before_flush", self._before_flush)
        self._guard_installed = False
