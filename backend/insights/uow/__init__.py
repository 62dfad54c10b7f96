"""Unit of Work abstractions and the SQLAlchemy-backed implementations services depend on."""

from .base import UnitOfWork
from .sqlalchemy_uow import SessionFactory, SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork

__all__ = [
    "SessionFactory",
    "UnitOfWork",
    "SQLAlchemyUnitOfWork",
    "SQLAlchemyReadOnlyUnitOfWork",
]
