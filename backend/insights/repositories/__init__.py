"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from insights.repositories.access_token import AccessTokenRepository
from insights.repositories.account import AccountRepository
from insights.repositories.base import BaseRepository, apply_sorting, parse_sort_tokens
from insights.repositories.page_view import PageViewEventRepository, PageViewRepository

__all__ = [
    # Base
    "BaseRepository",
    "apply_sorting",
    "parse_sort_tokens",
    # Domain
    "AccessTokenRepository",
    "AccountRepository",
    "PageViewEventRepository",
    "PageViewRepository",
]
