"""Tests for the read-write and read-only units of work."""

from __future__ import annotations

import pytest
from sqlalchemy import func, select, text

from tests.factories.user import UserFactory
from vidhub.models.user import User
from vidhub.uow import SQLAlchemyReadOnlyUnitOfWork as ROuow
from vidhub.uow import SQLAlchemyUnitOfWork as RWuow


def _count_users(session) -> int:
    return session.execute(select(func.count()).select_from(User)).scalar_one()


class TestSQLAlchemyUnitOfWork:
    def test_commits_on_success(self, session):
        with RWuow() as uow:
            uow.users.add(UserFactory.build())
        assert _count_users(session) == 1

    def test_rolls_back_on_error(self, session):
        with pytest.raises(RuntimeError), RWuow() as uow:
            uow.users.add(UserFactory.build())
            raise RuntimeError("boom")
        assert _count_users(session) == 0

    def test_exposes_repositories(self):
        uow = RWuow()
        assert uow.users.session is uow.session
        assert uow.subscriptions.session is uow.session
        assert uow.videos.session is uow.session


class TestSQLAlchemyReadOnlyUnitOfWork:
    def test_allows_reads(self, session):
        UserFactory()
        session.commit()
        with ROuow() as uow:
            assert uow.users.count() == 1

    def test_blocks_orm_flush_writes(self, session):
        with ROuow() as uow, pytest.raises(RuntimeError, match="ORM flush blocked"):
            uow.session.add(UserFactory.build())
            uow.session.flush()
        session.rollback()

    def test_blocks_core_dml(self, session):
        with ROuow() as uow, pytest.raises(RuntimeError, match="SQL statement blocked"):
            uow.session.execute(text("DELETE FROM users"))

    def test_disallows_commit(self, session):
        with ROuow() as uow, pytest.raises(RuntimeError):
            uow.commit()

    def test_guards_removed_after_exit(self, session):
        with ROuow():
            pass
        with RWuow() as uow:
            uow.users.add(UserFactory.build())
        assert _count_users(session) == 1
