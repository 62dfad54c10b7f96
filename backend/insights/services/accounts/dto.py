"""
DTOs for AccountService.

Data Transfer Objects isolate the service layer from ORM models: callers never
receive an ``Account`` row or its password hash.
"""

from __future__ import annotations

from dataclasses import dataclass

# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class AccountRegisterIn:
    """
    Input DTO for account registration.

    :param email: Login email (trimmed, case preserved).
    :type email: str
    :param password: Raw password to be hashed by the model.
    :type password: str
    """

    email: str
    password: str


@dataclass(frozen=True, slots=True)
class CredentialsIn:
    """
    Email/password pair presented for verification.

    :param email: Login email.
    :type email: str
    :param password: Raw password.
    :type password: str
    """

    email: str
    password: str


# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class AccountOut:
    """
    Public-safe account payload.

    :param id: Account identifier.
    :type id: int
    :param email: Stored email.
    :type email: str
    """

    id: int
    email: str
