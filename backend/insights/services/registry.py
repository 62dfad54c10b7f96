"""Build the application's services once and hand them to request handlers.

Services are created at start-up from the app config and stored on
``app.extensions``; handlers fetch them with :func:`get_services`.
"""

from __future__ import annotations

from dataclasses import dataclass

from flask import Flask, current_app

from insights.infra.jwt.flask_jwt_session_provider import FlaskJWTSessionProvider
from insights.services._shared.ports.clock import Clock, SystemClock
from insights.services.accounts.service import AccountService
from insights.services.sessions.service import SessionService
from insights.services.tokens.service import AccessTokenService
from insights.services.views.service import PageViewService
from insights.uow.sqlalchemy_uow import SessionFactory

EXTENSION_KEY = "insights.services"


@dataclass(frozen=True, slots=True)
class ServiceContainer:
    """Every service the HTTP and CLI layers depend on."""

    accounts: AccountService
    sessions: SessionService
    tokens: AccessTokenService
    views: PageViewService


def build_services(
    app: Flask,
    *,
    clock: Clock | None = None,
    session_factory: SessionFactory | None = None,
) -> ServiceContainer:
    """Wire services from ``app.config``.

    :param app: Configured application.
    :param clock: Time source shared by all services; system clock by default.
    :param session_factory: Session source; ``None`` uses the Flask-scoped session.
    :returns: A ready container.
    """
    clock = clock or SystemClock()
    accounts = AccountService(session_factory=session_factory, clock=clock)
    return ServiceContainer(
        accounts=accounts,
        sessions=SessionService(
            token_provider=FlaskJWTSessionProvider(),
            accounts=accounts,
            ttl=app.config["SESSION_TTL"],
            clock=clock,
        ),
        tokens=AccessTokenService(
            ttl=app.config["ACCESS_TOKEN_TTL"],
            session_factory=session_factory,
            clock=clock,
        ),
        views=PageViewService(session_factory=session_factory, clock=clock),
    )


def init_app(app: Flask, *, clock: Clock | None = None) -> ServiceContainer:
    """Build the services and register them on ``app.extensions``."""
    container = build_services(app, clock=clock)
    app.extensions[EXTENSION_KEY] = container
    return container


def get_services() -> ServiceContainer:
    """Return the container registered on the current app."""
    container = current_app.extensions.get(EXTENSION_KEY)
    if container is None:
        raise RuntimeError("Services are not initialized. Call registry.init_app() first.")
    return container
