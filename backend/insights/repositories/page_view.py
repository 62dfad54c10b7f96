"""Page view repositories: atomic counter upsert and event log queries."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite

from insights.models.page_view import PageView, PageViewEvent
from insights.repositories.base import BaseRepository

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class PageViewRepository(BaseRepository[PageView]):
    """Counters keyed by ``(account_id, url)``."""

    model = PageView

    def _sortable_fields(self):
        return {"url": PageView.url, "count": PageView.count}

    def increment(self, account_id: int, url: str) -> None:
        """Create the counter at 1 or add 1 to it in a single statement.

        Uses the dialect's native ``INSERT ... ON CONFLICT DO UPDATE`` so two
        concurrent first views of a URL cannot both insert, and concurrent
        increments never lose updates.

        :param account_id: Owning account.
        :type account_id: int
        :param url: Exact URL key.
        :type url: str
        :raises NotImplementedError: On dialects without ``ON CONFLICT``.
        """
        insert = _UPSERT_DIALECTS.get(self.dialect_name)
        if insert is None:
            raise NotImplementedError(
                f"Counter upsert is not supported on dialect {self.dialect_name!r}"
            )
        stmt = insert(PageView).values(account_id=account_id, url=url, count=1)
        stmt = stmt.on_conflict_do_update(
            index_elements=[PageView.account_id, PageView.url],
            set_={"count": PageView.count + 1},
        )
        self.session.execute(stmt)

    def get_count(self, account_id: int, url: str) -> int | None:
        """Return the stored count, or ``None`` when the pair was never viewed."""
        stmt = select(PageView.count).where(
            PageView.account_id == account_id,
            PageView.url == url,
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def list_for_account(self, account_id: int) -> list[PageView]:
        """Return every counter owned by ``account_id``."""
        return self.list(where=[PageView.account_id == account_id], sort=["url"])


class PageViewEventRepository(BaseRepository[PageViewEvent]):
    """Append-only log of individual views."""

    model = PageViewEvent

    def _sortable_fields(self):
        return {"created_at": PageViewEvent.created_at}

    def append(self, account_id: int, url: str, created_at: datetime) -> PageViewEvent:
        """Stage one event row for the current transaction."""
        return self.add(PageViewEvent(account_id=account_id, url=url, created_at=created_at))

    def list_in_range(
        self,
        account_id: int,
        url: str,
        start: datetime | None,
        end: datetime | None,
    ) -> list[PageViewEvent]:
        """Events for an exact ``(account_id, url)`` with ``start <= created_at <= end``.

        Either bound may be ``None`` to leave that side open. Results are
        ordered oldest first.
        """
        where = [PageViewEvent.account_id == account_id, PageViewEvent.url == url]
        if start is not None:
            where.append(PageViewEvent.created_at >= start)
        if end is not None:
            where.append(PageViewEvent.created_at <= end)
        return self.list(where=where, sort=["created_at"])

