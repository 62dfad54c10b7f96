"""Account model: the tenant identity owning tokens and page views."""

from __future__ import annotations

from typing import Any

from sqlalchemy import String, UniqueConstraint, inspect
from sqlalchemy.orm import Mapped, mapped_column, validates
from werkzeug.security import check_password_hash, generate_password_hash

from insights.core.extensions import db

from .base import PKMixin, ReprMixin


class Account(PKMixin, ReprMixin, db.Model):
    """
    Registered account (tenant).

    Fields
    ------
    email : str
        Login email. Trimmed, otherwise stored exactly as given; uniqueness is
        case-sensitive. Immutable once set.
    password_hash : str
        Salted adaptive hash (werkzeug format, write-only via ``password``).
    """

    __tablename__ = "accounts"

    email: Mapped[str] = mapped_column(String(254), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    __table_args__ = (UniqueConstraint("email", name="uq_accounts_email"),)

    # -------------------- Password API --------------------
    @property
    def password(self) -> Any:  # pragma: no cover - explicit write-only contract
        """
        Disallow reading passwords.

        :raises AttributeError: Always, to ensure password is write-only.
        """
        raise AttributeError("Password is write-only.")

    @password.setter
    def password(self, raw: str) -> None:
        """
        Hash and set the password.

        :param raw: Plain text password to hash.
        :type raw: str
        :raises ValueError: If the password is empty.
        """
        if not isinstance(raw, str) or not raw:
            raise ValueError("Password must be a non-empty string.")
        self.password_hash = generate_password_hash(raw)

    def verify_password(self, raw: str) -> bool:
        """
        Verify a password against the stored hash.

        The comparison is constant-time with respect to the candidate.

        :param raw: Plain text password candidate.
        :type raw: str
        :returns: ``True`` if it matches; otherwise ``False``.
        :rtype: bool
        """
        if not self.password_hash:
            return False
        return bool(check_password_hash(self.password_hash, raw))

    # -------------------- Validators --------------------
    @validates("email")
    def _validate_email(self, key: str, value: str) -> str:
        """
        Trim and sanity-check the email; refuse to change it once set.

        :param key: Field name (``email``).
        :type key: str
        :param value: Email to store.
        :type value: str
        :returns: Trimmed email, case preserved.
        :rtype: str
        :raises ValueError: If email is missing, malformed, or already set.
        """
        if not value or not isinstance(value, str):
            raise ValueError("Email is required.")
        v = value.strip()
        # Minimal sanity check; full validation happens at API layer.
        if "@" not in v or "." not in v.split("@")[-1]:
            raise ValueError("Email format looks invalid.")
        # Persisted rows may have expired attributes; reading reloads them.
        current = self.email if inspect(self).has_identity else self.__dict__.get("email")
        if current is not None and current != v:
            raise ValueError("Email is immutable.")
        return v
