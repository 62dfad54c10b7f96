"""Tiny helpers shared across test modules."""

from __future__ import annotations

from datetime import UTC, datetime

# Instant every test starts at; see the ``clock`` fixture.
FROZEN_AT = datetime(2024, 3, 1, 12, 0, 0, tzinfo=UTC)

# Password of the ``account`` fixture.
ACCOUNT_PASSWORD = "CorrectHorse9"


def bearer(value: str) -> dict[str, str]:
    """Return an ``Authorization`` header carrying ``value`` as a bearer credential."""
    return {"Authorization": f"Bearer {value}"}
