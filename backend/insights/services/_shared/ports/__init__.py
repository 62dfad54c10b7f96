"""
insights.services._shared.ports
===============================

*Ports* (hexagonal interfaces) the service layer depends on.

Modules
-------
- :mod:`clock`:
    Defines :class:`~.Clock` with :class:`~.SystemClock` for production and
    :class:`~.FixedClock` for tests, plus epoch-millisecond helpers.

- :mod:`session_token_provider`:
    Defines :class:`~.SessionTokenProvider`, the abstraction for signing and
    verifying stateless sessions.

Concrete adapters live under ``insights.infra``.
"""

from __future__ import annotations

from .clock import Clock, FixedClock, SystemClock, from_epoch_ms, to_epoch_ms
from .session_token_provider import SessionTokenProvider

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
    "SessionTokenProvider",
    "from_epoch_ms",
    "to_epoch_ms",
]
