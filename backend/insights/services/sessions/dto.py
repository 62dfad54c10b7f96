"""
DTOs for SessionService.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class SessionOut:
    """
    Freshly minted session.

    :param token: Compact signed token (JWT).
    :type token: str
    :param expires_at: Instant after which the session is rejected.
    :type expires_at: datetime
    """

    token: str
    expires_at: datetime


@dataclass(frozen=True, slots=True)
class SessionClaimsOut:
    """
    Verified session contents.

    :param account_id: Account the session was issued to.
    :type account_id: int
    :param email: Email recorded at issue time.
    :type email: str
    :param expires_at: Expiry carried by the token.
    :type expires_at: datetime
    """

    account_id: int
    email: str
    expires_at: datetime
