# insights/services/tokens/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

# ---------------------------- Output DTOs --------------------------------- #


@dataclass(frozen=True, slots=True)
class IssuedTokenOut:
    """
    Result of issuing an access token. The only place the secret is exposed.

    :param token: Opaque bearer value.
    :type token: str
    :param token_id: Identifier used for revocation.
    :type token_id: int
    :param expires_at: Expiry instant (UTC, millisecond precision).
    :type expires_at: datetime
    """

    token: str
    token_id: int
    expires_at: datetime


@dataclass(frozen=True, slots=True)
class AccessTokenOut:
    """
    Token metadata for listings; never includes the secret.

    :param id: Token identifier.
    :type id: int
    :param expires_at: Expiry instant.
    :type expires_at: datetime
    :param created_at: Issue instant.
    :type created_at: datetime
    :param expired: Whether the expiry had been reached when listed.
    :type expired: bool
    """

    id: int
    expires_at: datetime
    created_at: datetime
    expired: bool
