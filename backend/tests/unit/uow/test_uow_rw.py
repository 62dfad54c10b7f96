"""
Unit tests for SQLAlchemyUnitOfWork (writer), using factories.
"""

from __future__ import annotations

import pytest
from insights.models import Account
from insights.uow import SQLAlchemyUnitOfWork
from sqlalchemy import func, select
from sqlalchemy.orm import Session, sessionmaker
from tests.factories.account import AccountFactory


def _count_accounts(session) -> int:
    return session.execute(select(func.count()).select_from(Account)).scalar_one()


class TestSQLAlchemyUnitOfWorkWriter:
    def test_commits_on_success(self, db, session):
        """
        GIVEN a writer UoW
        WHEN an account is added and the block exits normally
        THEN the row is visible afterwards.
        """
        initial = _count_accounts(session)

        with SQLAlchemyUnitOfWork() as uow:
            uow.accounts.add(AccountFactory.build())

        assert _count_accounts(session) == initial + 1

    def test_rolls_back_on_exception(self, db, session):
        initial = _count_accounts(session)

        with pytest.raises(RuntimeError), SQLAlchemyUnitOfWork() as uow:
            uow.accounts.add(AccountFactory.build())
            raise RuntimeError("boom")

        assert _count_accounts(session) == initial

    def test_owned_session_is_closed_on_exit(self, connection, session):
        closed: list[Session] = []

        class _TrackingSession(Session):
            def close(self) -> None:
                closed.append(self)
                super().close()

        factory = sessionmaker(bind=connection, class_=_TrackingSession)

        with SQLAlchemyUnitOfWork(session_factory=factory) as uow:
            owned = uow.session
            assert owned is not session

        assert closed == [owned]

    def test_repositories_share_the_unit_session(self, session):
        with SQLAlchemyUnitOfWork() as uow:
            sessions = {
                id(uow.accounts.session),
                id(uow.access_tokens.session),
                id(uow.page_views.session),
                id(uow.page_view_events.session),
            }
        assert sessions == {id(uow.session)}
