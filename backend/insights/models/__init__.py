from insights.models.access_token import AccessToken
from insights.models.account import Account
from insights.models.page_view import PageView, PageViewEvent

__all__ = [
    "AccessToken",
    "Account",
    "PageView",
    "PageViewEvent",
]
