"""Access token repository: lookup by secret, scoped delete, pruning."""

from __future__ import annotations

from typing import cast

from sqlalchemy import delete, func, select

from insights.models.access_token import AccessToken
from insights.repositories.base import BaseRepository


class AccessTokenRepository(BaseRepository[AccessToken]):
    """Persistence-only repository for :class:`AccessToken`."""

    model = AccessToken

    def _sortable_fields(self):
        return {
            "id": AccessToken.id,
            "expiry": AccessToken.expiry,
            "created_at": AccessToken.created_at,
        }

    def get_by_token(self, token: str) -> AccessToken | None:
        """Fetch the row holding the exact token string.

        :param token: Opaque token as presented by the client.
        :type token: str
        :returns: Matching row or ``None``.
        :rtype: AccessToken | None
        """
        stmt = select(AccessToken).where(AccessToken.token == token)
        return cast(AccessToken | None, self.session.execute(stmt).scalars().first())

    def list_for_account(self, account_id: int) -> list[AccessToken]:
        """Return every token owned by ``account_id``, newest first."""
        return self.list(
            where=[AccessToken.account_id == account_id],
            sort=["-created_at"],
        )

    def delete_owned(self, token_id: int, account_id: int) -> int:
        """Delete a token only when both id and owner match.

        A single ``DELETE`` keeps the ownership check and the removal atomic.

        :param token_id: Token identifier.
        :type token_id: int
        :param account_id: Owner that must match.
        :type account_id: int
        :returns: Number of rows removed (0 or 1).
        :rtype: int
        """
        stmt = delete(AccessToken).where(
            AccessToken.id == token_id,
            AccessToken.account_id == account_id,
        )
        result = self.session.execute(stmt, execution_options={"synchronize_session": False})
        return int(result.rowcount or 0)

    def delete_expired(self, now_ms: int) -> int:
        """Remove every token whose expiry is at or before ``now_ms``.

        :returns: Number of rows removed.
        :rtype: int
        """
        stmt = delete(AccessToken).where(AccessToken.expiry <= now_ms)
        result = self.session.execute(stmt, execution_options={"synchronize_session": False})
        return int(result.rowcount or 0)

    def count_expired(self, now_ms: int) -> int:
        """Count tokens that :meth:`delete_expired` would remove."""
        stmt = select(func.count()).select_from(AccessToken).where(AccessToken.expiry <= now_ms)
        return int(self.session.execute(stmt).scalar_one())
