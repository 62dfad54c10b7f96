from insights.services.accounts.dto import AccountOut, AccountRegisterIn, CredentialsIn
from insights.services.accounts.service import AccountService

__all__ = ["AccountOut", "AccountRegisterIn", "AccountService", "CredentialsIn"]
