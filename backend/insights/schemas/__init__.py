"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import AccountSchema, LoginSchema, RegisterSchema, SessionSchema
from .token import AccessTokenSchema, IssuedTokenSchema
from .view import (
    RANGE_TIME_FORMAT,
    RecordViewSchema,
    ViewCountQuerySchema,
    ViewCountSchema,
    ViewEventSchema,
    ViewRangeQuerySchema,
)

__all__ = [
    "AccountSchema",
    "LoginSchema",
    "RegisterSchema",
    "SessionSchema",
    "AccessTokenSchema",
    "IssuedTokenSchema",
    "RANGE_TIME_FORMAT",
    "RecordViewSchema",
    "ViewCountQuerySchema",
    "ViewCountSchema",
    "ViewEventSchema",
    "ViewRangeQuerySchema",
]
