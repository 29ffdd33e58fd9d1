"""Base class for application services."""

from __future__ import annotations

from datetime import UTC, datetime

from vidhub.uow.sqlalchemy_uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide read-only and read-write units of work.
    * Keep services orchestration-only; no HTTP types leak in or out.

    Notes
    -----
    Services never touch the global session directly; every read or write
    goes through a Unit of Work.
    """

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """
        Create a read-write Unit of Work.

        :returns: Read-write UoW instance.
        :rtype: SQLAlchemyUnitOfWork
        """
        return SQLAlchemyUnitOfWork()

    def ro_uow(self) -> SQLAlchemyReadOnlyUnitOfWork:
        """
        Create a read-only Unit of Work.

        :returns: Read-only UoW instance.
        :rtype: SQLAlchemyReadOnlyUnitOfWork
        """
        return SQLAlchemyReadOnlyUnitOfWork()

    @staticmethod
    def now_utc() -> datetime:
        return datetime.now(UTC)
