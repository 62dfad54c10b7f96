"""Shared API helpers for authentication and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, g, jsonify, request

from insights.core.errors import Unauthorized
from insights.services.registry import get_services

F = TypeVar("F", bound=Callable[..., Any])

BEARER_PREFIX = "bearer "


def bearer_credential() -> str:
    """Return the value of ``Authorization: Bearer <value>``.

    :raises Unauthorized: When the header is missing or not a bearer credential.
    """

    header = request.headers.get("Authorization", "")
    if not header.lower().startswith(BEARER_PREFIX):
        raise Unauthorized()
    value = header[len(BEARER_PREFIX) :].strip()
    if not value:
        raise Unauthorized()
    return value


def require_session(func: F) -> F:
    """Ensure the request carries a valid signed session; sets ``g.account_id``."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        claims = get_services().sessions.verify_session(bearer_credential())
        g.account_id = claims.account_id
        g.email = claims.email
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def require_access_token(func: F) -> F:
    """Ensure the request carries a valid access token; sets ``g.account_id``."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        g.account_id = get_services().tokens.validate_token(bearer_credential())
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
