from __future__ import annotations

from datetime import datetime
from typing import Any, Protocol


class SessionTokenProvider(Protocol):
    """Port for minting and decoding signed session tokens.

    ``decode`` verifies the signature only. Expiry is judged by the caller
    against its own clock, so implementations must not reject a token for
    being expired.
    """

    def encode(self, *, identity: int | str, claims: dict[str, Any], expires_at: datetime) -> str:
        """Return a signed token carrying ``claims`` and an ``exp`` of ``expires_at``."""
        ...

    def decode(self, token: str) -> dict[str, Any]:
        """Return the verified claim set.

        :raises InvalidSessionError: If the signature or structure is invalid.
        """
        ...
