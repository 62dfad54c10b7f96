"""
AccessTokenService
==================

Opaque, revocable bearer tokens for devices and integrations.

- The secret is 64 random bytes, URL-safe base64 encoded, and returned once.
- Expiry is stored as epoch milliseconds and checked lazily on validation;
  nothing sweeps expired rows except the operator ``prune`` command.
- Revocation is scoped to the owner: a token owned by someone else and a
  token that does not exist are reported the same way.
"""

from __future__ import annotations

import logging
import secrets
from datetime import timedelta

from insights.models.access_token import AccessToken
from insights.repositories.access_token import AccessTokenRepository
from insights.services._shared.base import BaseService
from insights.services._shared.errors import ExpiredTokenError, InvalidTokenError, NotFoundError
from insights.services._shared.ports.clock import Clock, from_epoch_ms, to_epoch_ms
from insights.services.tokens.dto import AccessTokenOut, IssuedTokenOut
from insights.uow.sqlalchemy_uow import SessionFactory

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_TTL = timedelta(days=30)
TOKEN_BYTES = 64


class AccessTokenService(BaseService):
    """Issue, validate, list and revoke access tokens."""

    def __init__(
        self,
        *,
        ttl: timedelta = DEFAULT_TOKEN_TTL,
        session_factory: SessionFactory | None = None,
        clock: Clock | None = None,
    ) -> None:
        super().__init__(session_factory=session_factory, clock=clock)
        self.ttl = ttl

    # ------------------------------------------------------------------ #
    # Commands
    # ------------------------------------------------------------------ #

    def issue_token(self, account_id: int) -> IssuedTokenOut:
        """
        Create a new token for ``account_id``.

        :param account_id: Owner of the token.
        :type account_id: int
        :returns: Secret, id and expiry.
        :rtype: :class:`IssuedTokenOut`
        :raises StorageError: If the row cannot be written.
        """
        now = self.clock.now()
        expiry_ms = to_epoch_ms(now + self.ttl)
        with self.storage_guard("issue_token"):
            with self.rw_uow() as uow:
                repo: AccessTokenRepository = uow.access_tokens
                row = repo.add(
                    AccessToken(
                        account_id=account_id,
                        token=secrets.token_urlsafe(TOKEN_BYTES),
                        expiry=expiry_ms,
                        created_at=now,
                    )
                )
                out = IssuedTokenOut(
                    token=row.token,
                    token_id=row.id,
                    expires_at=from_epoch_ms(expiry_ms),
                )
        logger.info("access token issued", extra={"account_id": account_id, "token_id": out.token_id})
        return out

    def revoke_token(self, account_id: int, token_id: int) -> None:
        """
        Delete a token owned by ``account_id``.

        :raises NotFoundError: If no token with that id belongs to the account.
        """
        with self.storage_guard("revoke_token"):
            with self.rw_uow() as uow:
                removed = uow.access_tokens.delete_owned(token_id, account_id)
                if removed == 0:
                    raise NotFoundError("AccessToken", token_id)
        logger.info("access token revoked", extra={"account_id": account_id, "token_id": token_id})

    def prune_expired(self, *, dry_run: bool = False) -> int:
        """
        Delete (or, with ``dry_run``, count) tokens whose expiry has passed.

        :returns: Number of tokens removed or eligible for removal.
        :rtype: int
        """
        now_ms = to_epoch_ms(self.clock.now())
        if dry_run:
            with self.storage_guard("prune_expired"), self.ro_uow() as uow:
                return uow.access_tokens.count_expired(now_ms)
        with self.storage_guard("prune_expired"):
            with self.rw_uow() as uow:
                removed = uow.access_tokens.delete_expired(now_ms)
        logger.info("expired access tokens pruned", extra={"count": removed})
        return removed

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    def validate_token(self, token: str) -> int:
        """
        Resolve a presented token to its owner.

        :param token: Opaque value from the ``Authorization`` header.
        :type token: str
        :returns: Owning account id.
        :rtype: int
        :raises InvalidTokenError: If the token is unknown.
        :raises ExpiredTokenError: If the token's expiry has been reached.
        """
        now_ms = to_epoch_ms(self.clock.now())
        with self.storage_guard("validate_token"), self.ro_uow() as uow:
            row = uow.access_tokens.get_by_token(token)
            if row is None:
                raise InvalidTokenError("Unknown access token")
            if row.is_expired(now_ms):
                raise ExpiredTokenError("Access token expired")
            return row.account_id

    def list_tokens(self, account_id: int) -> list[AccessTokenOut]:
        """Return metadata for every token the account owns, newest first."""
        now_ms = to_epoch_ms(self.clock.now())
        with self.storage_guard("list_tokens"), self.ro_uow() as uow:
            return [
                AccessTokenOut(
                    id=row.id,
                    expires_at=from_epoch_ms(row.expiry),
                    created_at=row.created_at,
                    expired=row.is_expired(now_ms),
                )
                for row in uow.access_tokens.list_for_account(account_id)
            ]
