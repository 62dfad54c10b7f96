"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic**: they never depend on Flask or
HTTP. They are the stable contract between repositories, models and services.

The translation to HTTP responses (RFC 7807) is handled by
``insights/core/errors.py`` via ``BaseService.translate_exceptions()``.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    PostgreSQL reports the constraint name in the message. SQLite reports the
    offending columns instead (``UNIQUE constraint failed: accounts.email``),
    so the ``uq_<table>_<columns>`` naming convention is also matched against
    that form.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.
    constraint_name : str
        The database constraint to match (e.g., ``'uq_accounts_email'``).

    Returns
    -------
    bool
        True if the IntegrityError matches the given constraint.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    name = constraint_name.lower()
    if name in message:
        return True
    if name.startswith("uq_") and "unique constraint failed" in message:
        table_and_cols = name[len("uq_") :]
        failed = message.split("unique constraint failed:", 1)[1]
        columns = [part.strip() for part in failed.split(",")]
        flattened = "_".join(col.replace(".", "_") for col in columns)
        return table_and_cols == flattened
    return False


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - The API layer translates them via ``BaseService.translate_exceptions``.
    """

    pass


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found, or not owned by the caller.

    :param entity: Entity name (e.g., "Account").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.entity} not found: {self.key}"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "Account").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:  # pragma: no cover
        return f"Conflict on {self.entity}: {self.detail}"


class StorageError(ServiceError):
    """Raised when the backing store fails; the unit of work was rolled back."""


# --------------------------------------------------------------------------- #
# Authentication failures
# --------------------------------------------------------------------------- #


class AuthenticationError(ServiceError):
    """
    Base for every credential rejection.

    Subclasses carry the precise reason for logs and tests; clients only ever
    see one generic message.
    """


class InvalidCredentialError(AuthenticationError):
    """Password does not match (or, on login, the account does not exist)."""


class InvalidTokenError(AuthenticationError):
    """No access token with that value exists."""


class ExpiredTokenError(AuthenticationError):
    """The access token exists but its expiry has been reached."""


class InvalidSessionError(AuthenticationError):
    """Session signature or claims are invalid."""


class ExpiredSessionError(AuthenticationError):
    """Session signature is valid but the session has expired."""
