"""Service layer public API.

Callers import from :mod:`insights.services` without knowing internal structure.

Re-exports
----------
- Base primitive (from ``insights.services._shared.base``)
    * :class:`BaseService`

- Credential store (from ``insights.services.accounts``)
    * :class:`AccountService`
    * DTOs: :class:`AccountRegisterIn`, :class:`CredentialsIn`, :class:`AccountOut`

- Session issuer (from ``insights.services.sessions``)
    * :class:`SessionService`
    * DTOs: :class:`SessionOut`, :class:`SessionClaimsOut`

- Token store (from ``insights.services.tokens``)
    * :class:`AccessTokenService`
    * DTOs: :class:`IssuedTokenOut`, :class:`AccessTokenOut`

- View store (from ``insights.services.views``)
    * :class:`PageViewService`
    * DTOs: :class:`PageViewCountOut`, :class:`PageViewEventOut`

The wiring helpers live in :mod:`insights.services.registry`, which is not
re-exported here because it depends on infrastructure adapters.
"""

from __future__ import annotations

from ._shared.base import BaseService
from .accounts.dto import AccountOut, AccountRegisterIn, CredentialsIn
from .accounts.service import AccountService
from .sessions.dto import SessionClaimsOut, SessionOut
from .sessions.service import SessionService
from .tokens.dto import AccessTokenOut, IssuedTokenOut
from .tokens.service import AccessTokenService
from .views.dto import PageViewCountOut, PageViewEventOut
from .views.service import PageViewService

__all__ = [
    # Base
    "BaseService",
    # Accounts
    "AccountService",
    "AccountRegisterIn",
    "CredentialsIn",
    "AccountOut",
    # Sessions
    "SessionService",
    "SessionOut",
    "SessionClaimsOut",
    # Tokens
    "AccessTokenService",
    "IssuedTokenOut",
    "AccessTokenOut",
    # Views
    "PageViewService",
    "PageViewCountOut",
    "PageViewEventOut",
]
