"""Pytest fixtures configuring an isolated transactional database layer.

Each test runs inside a SAVEPOINT-backed transaction against an in-memory
SQLite database so data changes never leak between cases. Services share a
:class:`FixedClock` that is rewound before every test.
"""

from __future__ import annotations

import os

import pytest
from insights.core.config import TestingConfig
from insights.core.extensions import db as _db  # Flask-SQLAlchemy instance
from insights.factory import create_app  # application factory under test
from insights.services._shared.ports.clock import FixedClock
from insights.services.registry import get_services
from sqlalchemy import event
from sqlalchemy.orm import scoped_session, sessionmaker
from tests.helpers.utils import ACCOUNT_PASSWORD, FROZEN_AT, bearer


@pytest.fixture(scope="session")
def clock():
    """Clock shared by every service of the test application."""
    return FixedClock(FROZEN_AT)


@pytest.fixture(autouse=True)
def _rewind_clock(clock):
    """Reset the shared clock so tests never depend on each other's time travel."""
    clock.set(FROZEN_AT)
    yield


@pytest.fixture(scope="session")
def app(clock):
    """Create a Flask application configured for testing.

    Returns
    -------
    flask.Flask
        Application instance with :class:`TestingConfig` applied and logging
        noise reduced.
    """
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    app = create_app(TestingConfig, clock=clock)
    app.logger.setLevel("WARNING")
    return app


@pytest.fixture(scope="session")
def db(app):
    """Create database tables once per test session.

    Yields
    ------
    flask_sqlalchemy.SQLAlchemy
        Database extension bound to the testing application.
    """
    with app.app_context():
        _db.create_all()
        yield _db
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope="session")
def connection(db):
    """Keep a dedicated DBAPI connection open for the whole session."""
    conn = db.engine.connect()
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="function")
def session(app, db, connection):
    """Provide a SQLAlchemy session wrapped in a nested transaction.

    Yields
    ------
    sqlalchemy.orm.scoping.scoped_session
        Scoped session bound to the shared connection; automatically rolled
        back after each test.

    Notes
    -----
    SQLAlchemy 2.0 pattern for transactional tests: a top-level transaction,
    a SAVEPOINT per test, and a fresh SAVEPOINT whenever SQLAlchemy ends one.
    Service commits only release their own SAVEPOINT. Each test also gets its
    own application context so ``flask.g`` never carries over between tests.
    """
    top_trans = connection.begin()

    SessionFactory = sessionmaker(bind=connection, future=True)
    scoped = scoped_session(SessionFactory)

    nested = connection.begin_nested()

    @event.listens_for(scoped(), "after_transaction_end")
    def _restart_savepoint(sess, trans):  # pragma: no cover
        if trans.nested and not trans._parent.nested:
            nonlocal nested
            nested = connection.begin_nested()

    # Monkey-patch db.session so app code uses this scoped session
    original_session = db.session
    db.session.remove()
    db.session = scoped

    ctx = app.app_context()
    ctx.push()
    try:
        yield scoped
    finally:
        ctx.pop()
        scoped.remove()
        db.session = original_session
        top_trans.rollback()


@pytest.fixture()
def services(app, session):
    """Service container registered on the test application."""
    with app.app_context():
        return get_services()


@pytest.fixture()
def client(app, session):
    """Flask test client sharing the per-test transactional session."""
    return app.test_client()


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


# -- Hook up Factory Boy to pytest SQLAlchemy session --------------------------
@pytest.fixture(autouse=True)
def _factories_session(session):
    """Wire Factory Boy's session helper to the transactional session fixture."""
    from tests.factories import SQLAlchemySession

    SQLAlchemySession.set(session)
    yield


@pytest.fixture()
def app_ctx(app):
    """Push an application context for code that reads ``current_app``."""
    with app.app_context():
        yield


# -- HTTP-level helpers --------------------------------------------------------
@pytest.fixture()
def account(services):
    """Registered account as a DTO, safe to use across requests."""
    from insights.services.accounts.dto import AccountRegisterIn

    return services.accounts.register_account(
        AccountRegisterIn(email="owner@example.com", password=ACCOUNT_PASSWORD)
    )


@pytest.fixture()
def session_headers(app_ctx, services, account):
    """Authorization header carrying a signed session for ``account``."""
    return bearer(services.sessions.issue_session(account.id, account.email).token)


@pytest.fixture()
def token_headers(services, account):
    """Authorization header carrying an access token for ``account``."""
    return bearer(services.tokens.issue_token(account.id).token)
