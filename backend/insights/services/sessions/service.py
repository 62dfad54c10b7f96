# insights/services/sessions/service.py
from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta
from typing import Any

from insights.services._shared.errors import (
    ExpiredSessionError,
    InvalidCredentialError,
    InvalidSessionError,
    NotFoundError,
)
from insights.services._shared.ports.clock import Clock, SystemClock
from insights.services._shared.ports.session_token_provider import SessionTokenProvider
from insights.services.accounts.dto import CredentialsIn
from insights.services.accounts.service import AccountService
from insights.services.sessions.dto import SessionClaimsOut, SessionOut

logger = logging.getLogger(__name__)

DEFAULT_SESSION_TTL = timedelta(hours=72)


class SessionService:
    """
    Stateless signed sessions.

    Sessions are self-contained: nothing is stored, so they cannot be revoked
    before ``expires_at``. Use access tokens where revocation matters.
    """

    def __init__(
        self,
        *,
        token_provider: SessionTokenProvider,
        accounts: AccountService,
        ttl: timedelta = DEFAULT_SESSION_TTL,
        clock: Clock | None = None,
    ) -> None:
        """
        :param token_provider: Adapter that signs and verifies tokens.
        :param accounts: Credential store used by :meth:`login`.
        :param ttl: Session lifetime.
        :param clock: Time source for ``exp`` and the expiry check.
        """
        self.tokens = token_provider
        self.accounts = accounts
        self.ttl = ttl
        self.clock: Clock = clock or SystemClock()

    def issue_session(self, account_id: int, email: str) -> SessionOut:
        """
        Mint a session for an already authenticated account.

        :param account_id: Account identifier.
        :param email: Account email, copied into the claims.
        :returns: Token and its expiry.
        """
        expires_at = self.clock.now() + self.ttl
        # JWT ``exp`` has second resolution; round up so the session never undercuts its TTL.
        if expires_at.microsecond:
            expires_at = expires_at.replace(microsecond=0) + timedelta(seconds=1)
        claims: dict[str, Any] = {"email": email, "accountId": account_id}
        token = self.tokens.encode(identity=account_id, claims=claims, expires_at=expires_at)
        return SessionOut(token=token, expires_at=expires_at)

    def verify_session(self, token: str) -> SessionClaimsOut:
        """
        Check signature, claim shape and expiry.

        :param token: Token presented by the client.
        :returns: Verified claims.
        :raises InvalidSessionError: If the signature fails or claims are malformed.
        :raises ExpiredSessionError: If the clock is past the token's expiry.
        """
        payload = self.tokens.decode(token)
        account_id = payload.get("accountId")
        email = payload.get("email")
        exp = payload.get("exp")
        if (
            not isinstance(account_id, int)
            or isinstance(account_id, bool)
            or not isinstance(email, str)
            or not isinstance(exp, int | float)
        ):
            raise InvalidSessionError("Session claims are missing or malformed")

        expires_at = datetime.fromtimestamp(exp, tz=UTC)
        if self.clock.now() > expires_at:
            raise ExpiredSessionError("Session expired")
        return SessionClaimsOut(account_id=account_id, email=email, expires_at=expires_at)

    def login(self, email: str, password: str) -> SessionOut:
        """
        Verify credentials and mint a session.

        A missing account and a wrong password both surface as
        :class:`InvalidCredentialError`.

        :raises InvalidCredentialError: On any credential mismatch.
        """
        try:
            account = self.accounts.verify_credentials(CredentialsIn(email=email, password=password))
        except NotFoundError as exc:
            raise InvalidCredentialError("Unknown account") from exc
        logger.info("session issued", extra={"account_id": account.id})
        return self.issue_session(account.id, account.email)
