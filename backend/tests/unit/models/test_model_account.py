"""Tests for the Account model."""

from __future__ import annotations

import pytest
from insights.models.account import Account
from sqlalchemy.exc import IntegrityError


class TestAccount:
    def test_password_hashing(self, session):
        a = Account(email="hash@example.com")
        a.password = "secret123"
        session.add(a)
        session.commit()
        assert a.password_hash != "secret123"
        assert a.verify_password("secret123") is True
        assert a.verify_password("wrong") is False

    def test_password_is_write_only(self):
        a = Account(email="a@example.com")
        a.password = "x"
        with pytest.raises(AttributeError):
            _ = a.password

    def test_empty_password_rejected(self):
        a = Account(email="empty@example.com")
        with pytest.raises(ValueError):
            a.password = ""

    def test_email_trimmed_but_case_preserved(self, session):
        a = Account(email="  Mixed.Case@Example.com ", password="pw")
        session.add(a)
        session.commit()
        assert a.email == "Mixed.Case@Example.com"

    def test_email_unique_is_case_sensitive(self, session):
        session.add(Account(email="carol@example.com", password="pw"))
        session.add(Account(email="Carol@example.com", password="pw"))
        session.commit()

        session.add(Account(email="carol@example.com", password="pw"))
        with pytest.raises(IntegrityError):
            session.commit()

    def test_email_is_immutable(self, session):
        a = Account(email="fixed@example.com", password="pw")
        session.add(a)
        session.commit()
        with pytest.raises(ValueError, match="immutable"):
            a.email = "other@example.com"

    @pytest.mark.parametrize("bad", ["", "no-at-sign", "user@nodot"])
    def test_malformed_email_rejected(self, bad):
        with pytest.raises(ValueError):
            Account(email=bad)
