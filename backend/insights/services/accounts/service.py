"""
AccountService
==============

Credential store: creates accounts and checks passwords.

- Registration does an advisory lookup first; the ``uq_accounts_email``
  constraint decides concurrent races.
- Passwords are hashed by the model (werkzeug, salted adaptive hash) and
  never leave it.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from insights.models.account import Account
from insights.repositories.account import AccountRepository
from insights.services._shared.base import BaseService
from insights.services._shared.errors import (
    ConflictError,
    InvalidCredentialError,
    NotFoundError,
    ServiceError,
    StorageError,
    violates,
)
from insights.services.accounts.dto import AccountOut, AccountRegisterIn, CredentialsIn

logger = logging.getLogger(__name__)

EMAIL_CONSTRAINT = "uq_accounts_email"


class AccountService(BaseService):
    """Application service for account registration and credential checks."""

    # ------------------------------------------------------------------ #
    # Commands
    # ------------------------------------------------------------------ #

    def register_account(self, dto: AccountRegisterIn) -> AccountOut:
        """
        Create an account with a hashed password.

        Of two concurrent registrations for the same email exactly one
        succeeds; the loser gets :class:`ConflictError` and the winner's
        password stays in place.

        :param dto: Registration input.
        :type dto: :class:`AccountRegisterIn`
        :returns: The created account.
        :rtype: :class:`AccountOut`
        :raises ConflictError: If the email is already registered.
        :raises ServiceError: If the email or password is rejected by the model.
        :raises StorageError: On any other store failure.
        """
        email = dto.email.strip()
        try:
            with self.rw_uow() as uow:
                repo: AccountRepository = uow.accounts
                if repo.exists_by_email(email):
                    raise ConflictError("Account", "email already registered")
                try:
                    account = Account(email=email, password=dto.password)
                except ValueError as exc:
                    raise ServiceError(str(exc)) from exc
                repo.add(account)
                out = self._to_out(account)
        except IntegrityError as exc:
            if violates(exc, EMAIL_CONSTRAINT):
                raise ConflictError("Account", "email already registered") from exc
            raise StorageError("Storage failure during register_account") from exc
        except SQLAlchemyError as exc:
            raise StorageError("Storage failure during register_account") from exc

        logger.info("account registered", extra={"account_id": out.id})
        return out

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    def verify_credentials(self, dto: CredentialsIn) -> AccountOut:
        """
        Check an email/password pair.

        :param dto: Credentials to verify.
        :type dto: :class:`CredentialsIn`
        :returns: The matching account.
        :rtype: :class:`AccountOut`
        :raises NotFoundError: If no account has that email.
        :raises InvalidCredentialError: If the password does not match.
        """
        with self.storage_guard("verify_credentials"), self.ro_uow() as uow:
            repo: AccountRepository = uow.accounts
            account = repo.get_by_email(dto.email)
            if account is None:
                raise NotFoundError("Account", dto.email.strip())
            if not account.verify_password(dto.password):
                raise InvalidCredentialError("Password mismatch")
            return self._to_out(account)

    def get_account(self, account_id: int) -> AccountOut:
        """
        Fetch an account by id.

        :raises NotFoundError: If the account does not exist.
        """
        with self.storage_guard("get_account"), self.ro_uow() as uow:
            account = uow.accounts.get(account_id)
            if account is None:
                raise NotFoundError("Account", account_id)
            return self._to_out(account)

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _to_out(account: Account) -> AccountOut:
        return AccountOut(id=account.id, email=account.email)
