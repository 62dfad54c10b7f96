"""Per-account URL counters and the append-only view event log."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from insights.core.extensions import db

from .base import PKMixin, ReprMixin, UTCDateTime


class PageView(PKMixin, ReprMixin, db.Model):
    """
    Aggregate counter, one row per ``(account_id, url)``.

    ``count`` equals the number of successful increments for the pair. Rows
    are created by the first increment and never deleted or decremented.
    """

    __tablename__ = "page_views"

    account_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False
    )
    url: Mapped[str] = mapped_column(Text, nullable=False)
    count: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")

    __table_args__ = (
        UniqueConstraint("account_id", "url", name="uq_page_views_account_id_url"),
        CheckConstraint("count >= 0", name="count_non_negative"),
    )


class PageViewEvent(PKMixin, ReprMixin, db.Model):
    """
    Individual view, one row per increment.

    The number of rows for a pair always equals ``PageView.count`` because
    both are written in the same transaction.
    """

    __tablename__ = "page_views_individual"

    account_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False
    )
    url: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)

    __table_args__ = (
        Index("ix_page_views_individual_account_url_created", "account_id", "url", "created_at"),
    )
