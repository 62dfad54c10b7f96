"""
Unit tests for SQLAlchemyReadOnlyUnitOfWork.

Only the portable ORM guard and the commit ban are covered here; the
cursor-level guard and ``SET TRANSACTION READ ONLY`` need a server database.
"""

import pytest
from insights.models import Account
from insights.uow import SQLAlchemyReadOnlyUnitOfWork as ROuow
from insights.uow import SQLAlchemyUnitOfWork as RWuow
from sqlalchemy import func, select, text
from tests.factories.account import DEFAULT_PASSWORD, AccountFactory


class TestSQLAlchemyReadOnlyUnitOfWork:
    def test_blocks_orm_flush_writes(self, session):
        with ROuow() as uow, pytest.raises(RuntimeError, match="ORM flush blocked"):
            uow.session.add(AccountFactory.build())
            uow.session.flush()

    def test_allows_reads(self, session):
        with RWuow() as uow:
            uow.accounts.add(AccountFactory.build())

        with ROuow() as uow:
            count = uow.session.execute(select(func.count()).select_from(Account)).scalar_one()
            assert count >= 1

    def test_disallows_commit(self, session):
        with ROuow() as uow, pytest.raises(RuntimeError, match="does not allow commit"):
            uow.commit()

    def test_blocks_core_dml(self, db, session):
        if db.engine.url.get_backend_name() == "sqlite":
            pytest.skip("Cursor-level guard is exercised against a server database only")
        with ROuow() as uow, pytest.raises(RuntimeError, match="SQL statement blocked"):
            uow.session.execute(
                text("INSERT INTO accounts (email, password_hash) VALUES ('x@example.com', 'h')")
            )

    def test_factory_rows_are_clean_for_read_scopes(self, session):
        acc = AccountFactory()
        assert acc not in session.dirty

        with ROuow() as uow:
            assert uow.accounts.get(acc.id).verify_password(DEFAULT_PASSWORD)
