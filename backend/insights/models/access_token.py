"""Opaque, revocable bearer token issued to an account."""

from __future__ import annotations

from sqlalchemy import BigInteger, ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from insights.core.extensions import db

from .base import CreatedAtMixin, PKMixin, ReprMixin


class AccessToken(PKMixin, ReprMixin, CreatedAtMixin, db.Model):
    """
    Long-lived per-device credential.

    Fields
    ------
    account_id : int
        Owning account. Part of every revocation predicate.
    token : str
        URL-safe secret shown once to the caller. Unique.
    expiry : int
        Expiry instant in epoch milliseconds (UTC). Checked lazily; expired
        rows stay until revoked or pruned.
    """

    __tablename__ = "access_tokens"

    account_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False
    )
    token: Mapped[str] = mapped_column(String(128), nullable=False)
    expiry: Mapped[int] = mapped_column(BigInteger, nullable=False)

    __table_args__ = (
        UniqueConstraint("token", name="uq_access_tokens_token"),
        Index("ix_access_tokens_account_id", "account_id"),
    )

    def is_expired(self, now_ms: int) -> bool:
        """Return ``True`` once ``now_ms`` reaches the stored expiry."""
        return now_ms >= self.expiry
