"""Account repository: lookups by email and id."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select

from insights.models.account import Account
from insights.repositories.base import BaseRepository


class AccountRepository(BaseRepository[Account]):
    """Persistence-only repository for :class:`Account`.

    Emails are matched after trimming only; lookups are case-sensitive.
    """

    model = Account

    def _sortable_fields(self):
        return {"id": Account.id, "email": Account.email}

    def get_by_email(self, email: str) -> Account | None:
        """Fetch an account by email.

        :param email: Email address (surrounding whitespace ignored).
        :type email: str
        :returns: Account instance or ``None`` when not found.
        :rtype: Account | None
        """
        stmt = select(Account).where(Account.email == email.strip())
        return cast(Account | None, self.session.execute(stmt).scalars().first())

    def exists_by_email(self, email: str) -> bool:
        """Return ``True`` when an account with the provided email exists."""
        stmt = select(Account.id).where(Account.email == email.strip())
        return bool(self.session.execute(stmt).first())
