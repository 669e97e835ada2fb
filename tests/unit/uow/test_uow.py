"""Unit tests for the SQLAlchemy units of work."""

from __future__ import annotations

import pytest

from blogapi.models.user import User
from blogapi.uow import SQLAlchemyReadOnlyUnitOfWork as ROuow
from blogapi.uow import SQLAlchemyUnitOfWork as RWuow
from tests.factories.user import DEFAULT_PASSWORD, UserFactory


def _new_user(username: str) -> User:
    return User(
        username=username,
        name=username.title(),
        email=f"{username}@example.com",
        password=DEFAULT_PASSWORD,
    )


class TestReadWriteUnitOfWork:
    def test_commits_on_clean_exit(self, session):
        with RWuow() as uow:
            uow.users.add(_new_user("ivy"))

        session.expire_all()
        assert session.query(User).filter_by(username="ivy").count() == 1

    def test_rolls_back_on_error(self, session):
        with pytest.raises(RuntimeError), RWuow() as uow:
            uow.users.add(_new_user("jack"))
            raise RuntimeError("boom")

        assert session.query(User).filter_by(username="jack").count() == 0

    def test_exposes_repositories(self, app):
        with RWuow() as uow:
            assert uow.users.session is uow.session
            assert uow.posts.session is uow.session


class TestReadOnlyUnitOfWork:
    def test_allows_reads(self, session):
        UserFactory(username="kim")
        with ROuow() as uow:
            assert uow.users.find_by_username_or_email(username="kim") is not None

    def test_blocks_orm_flush_writes(self, session):
        with ROuow() as uow, pytest.raises(RuntimeError, match="ORM flush blocked"):
            uow.session.add(_new_user("leo"))
            uow.session.flush()
        session.rollback()

    def test_disallows_commit(self, app):
        with ROuow() as uow, pytest.raises(RuntimeError, match="does not allow commit"):
            uow.commit()

    def test_guard_removed_after_exit(self, session):
        with ROuow():
            pass
        with RWuow() as uow:
            uow.users.add(_new_user("mia"))
        assert session.query(User).filter_by(username="mia").count() == 1
