# insights/services/views/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class PageViewCountOut:
    """
    Counter for one URL of an account.

    :param url: Exact URL key.
    :type url: str
    :param count: Number of recorded views.
    :type count: int
    """

    url: str
    count: int


@dataclass(frozen=True, slots=True)
class PageViewEventOut:
    """
    One recorded view.

    :param timestamp: When the view was recorded (UTC).
    :type timestamp: datetime
    """

    timestamp: datetime
