from insights.services.views.dto import PageViewCountOut, PageViewEventOut
from insights.services.views.service import PageViewService

__all__ = ["PageViewCountOut", "PageViewEventOut", "PageViewService"]
