"""
PageViewService
===============

Per-account view counters and the event log behind them.

Every operation takes the caller's resolved account id and touches only that
account's rows. Recording a view bumps the counter and appends an event in
one transaction, so ``count`` and the number of events never drift apart.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from insights.services._shared.base import BaseService
from insights.services._shared.errors import ServiceError
from insights.services.views.dto import PageViewCountOut, PageViewEventOut

logger = logging.getLogger(__name__)


def _as_utc(moment: datetime | None) -> datetime | None:
    if moment is None:
        return None
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


class PageViewService(BaseService):
    """Record and query page views for one account at a time."""

    # ------------------------------------------------------------------ #
    # Commands
    # ------------------------------------------------------------------ #

    def record_view(self, account_id: int, url: str) -> None:
        """
        Count one view of ``url`` and log it with the current time.

        Concurrent calls for the same key never lose an increment: the
        counter is bumped by a single ``INSERT ... ON CONFLICT DO UPDATE``.

        :param account_id: Owning account.
        :type account_id: int
        :param url: Exact URL; must not be blank.
        :type url: str
        :raises ServiceError: If ``url`` is empty or whitespace.
        :raises StorageError: If either write fails; neither is kept.
        """
        if not isinstance(url, str) or not url.strip():
            raise ServiceError("url must be a non-empty string")

        now = self.clock.now()
        with self.storage_guard("record_view"):
            with self.rw_uow() as uow:
                uow.page_views.increment(account_id, url)
                uow.page_view_events.append(account_id, url, now)
        logger.debug("page view recorded", extra={"account_id": account_id, "url": url})

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    def get_count(self, account_id: int, url: str) -> int:
        """Return the view count for ``url``; ``0`` when it was never viewed."""
        with self.storage_guard("get_count"), self.ro_uow() as uow:
            count = uow.page_views.get_count(account_id, url)
        return count or 0

    def get_all_counts(self, account_id: int) -> list[PageViewCountOut]:
        """Return every counter the account owns."""
        with self.storage_guard("get_all_counts"), self.ro_uow() as uow:
            return [
                PageViewCountOut(url=row.url, count=row.count)
                for row in uow.page_views.list_for_account(account_id)
            ]

    def get_events_in_range(
        self,
        account_id: int,
        url: str,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[PageViewEventOut]:
        """
        Return views of ``url`` recorded between ``start`` and ``end``, inclusive.

        Naive datetimes are read as UTC. ``None`` leaves that side unbounded.

        :param account_id: Owning account.
        :type account_id: int
        :param url: Exact URL.
        :type url: str
        :param start: Lower bound, inclusive.
        :type start: datetime | None
        :param end: Upper bound, inclusive.
        :type end: datetime | None
        :returns: Events ordered oldest first; empty when none match.
        :rtype: list[PageViewEventOut]
        """
        with self.storage_guard("get_events_in_range"), self.ro_uow() as uow:
            rows = uow.page_view_events.list_in_range(
                account_id, url, _as_utc(start), _as_utc(end)
            )
            return [PageViewEventOut(timestamp=row.created_at) for row in rows]
