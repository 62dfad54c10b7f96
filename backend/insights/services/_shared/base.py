# insights/services/_shared/base.py
from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

from insights.core import errors as api_errors
from insights.services._shared.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ServiceError,
    StorageError,
)
from insights.services._shared.ports.clock import Clock, SystemClock
from insights.uow.sqlalchemy_uow import (
    SessionFactory,
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)

logger = logging.getLogger(__name__)


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work.
    * Turn store failures into :class:`StorageError`.
    * Centralize translation of service errors to API errors.

    Notes
    -----
    - Services never touch the global session directly; always use a Unit of Work.
    - ``session_factory`` selects where sessions come from. ``None`` means the
      Flask-scoped session; any ``sessionmaker`` makes each unit own its session.
    """

    DEFAULT_READ_ISOLATION = "READ COMMITTED"

    def __init__(
        self,
        *,
        session_factory: SessionFactory | None = None,
        clock: Clock | None = None,
    ) -> None:
        """
        Initialize the base service.

        :param session_factory: Optional session source for units of work.
        :type session_factory: Callable[[], Session] | None
        :param clock: Time source; defaults to the system clock.
        :type clock: Clock | None
        """
        self.session_factory = session_factory
        self.clock: Clock = clock or SystemClock()

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """
        Create a read-write Unit of Work.

        :returns: Read-write UoW instance.
        :rtype: SQLAlchemyUnitOfWork
        """
        return SQLAlchemyUnitOfWork(session_factory=self.session_factory)

    def ro_uow(
        self, *, isolation: str | None = None, enforce_db_readonly: bool = True
    ) -> SQLAlchemyReadOnlyUnitOfWork:
        """
        Create a read-only Unit of Work.

        :param isolation: Transaction isolation level (e.g. "READ COMMITTED").
        :type isolation: str | None
        :param enforce_db_readonly: Apply ``SET TRANSACTION READ ONLY`` when supported.
        :type enforce_db_readonly: bool
        :returns: Read-only UoW instance.
        :rtype: SQLAlchemyReadOnlyUnitOfWork
        """
        return SQLAlchemyReadOnlyUnitOfWork(
            session_factory=self.session_factory,
            isolation_level=isolation or self.DEFAULT_READ_ISOLATION,
            enforce_db_readonly=enforce_db_readonly,
        )

    @contextmanager
    def storage_guard(self, operation: str) -> Iterator[None]:
        """
        Re-raise any SQLAlchemy failure inside the block as :class:`StorageError`.

        Wrap the whole ``with self.rw_uow()`` block so the rollback has already
        happened when the error surfaces.

        :param operation: Short label used in the log line and message.
        :type operation: str
        :raises StorageError: When the store raised ``SQLAlchemyError``.
        """
        try:
            yield
        except SQLAlchemyError as exc:
            logger.warning("Storage failure during %s: %s", operation, exc.__class__.__name__)
            raise StorageError(f"Storage failure during {operation}") from exc

    # -------------------------- Error handling ------------------------------

    @staticmethod
    def translate_exceptions(exc: Exception) -> Exception:
        """
        Map service-level errors to API-level (HTTP) errors.

        Every :class:`AuthenticationError` collapses to one generic 401 so the
        response never reveals which check failed.

        :param exc: Exception raised within the service.
        :type exc: Exception
        :returns: Translated exception ready to be re-raised.
        :rtype: Exception
        """
        if isinstance(exc, NotFoundError):
            return api_errors.NotFound(str(exc))

        if isinstance(exc, ConflictError):
            return api_errors.Conflict(str(exc))

        if isinstance(exc, AuthenticationError):
            return api_errors.Unauthorized()

        if isinstance(exc, StorageError):
            return api_errors.ServiceUnavailable()

        # Any other ServiceError subclass → 400 Bad Request
        if isinstance(exc, ServiceError):
            return api_errors.APIError(
                message=str(exc),
                status_code=400,
                code="bad_request",
            )

        return exc
