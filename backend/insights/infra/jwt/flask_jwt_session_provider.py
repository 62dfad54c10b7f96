# insights/infra/jwt/flask_jwt_session_provider.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, cast

import jwt as pyjwt
from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException

from insights.services._shared.errors import InvalidSessionError
from insights.services._shared.ports import SessionTokenProvider


@dataclass(slots=True)
class FlaskJWTSessionProvider(SessionTokenProvider):
    """
    Adapter for Flask-JWT-Extended (HS256, ``JWT_SECRET_KEY``).

    ``exp`` is written from the caller's ``expires_at`` instead of the
    library's wall clock, and decoding ignores expiry so the service can judge
    it against its injected clock.

    .. note::
       Requires an active Flask app context with JWT settings.
    """

    def encode(self, *, identity: int | str, claims: dict[str, Any], expires_at: datetime) -> str:
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=UTC)
        merged = dict(claims)
        merged["exp"] = int(expires_at.timestamp())
        # Flask-JWT-Extended applies additional_claims last, so our ``exp`` wins.
        return cast(
            str,
            create_access_token(identity=str(identity), additional_claims=merged),
        )

    def decode(self, token: str) -> dict[str, Any]:
        try:
            return cast(dict[str, Any], decode_token(token, allow_expired=True))
        except (pyjwt.InvalidTokenError, JWTExtendedException) as exc:
            raise InvalidSessionError("Session signature or structure is invalid") from exc
