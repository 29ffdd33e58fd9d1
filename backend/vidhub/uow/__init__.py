"""Unit of Work implementations."""

from __future__ import annotations

from vidhub.uow.base import UnitOfWork
from vidhub.uow.sqlalchemy_uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork

__all__ = ["SQLAlchemyReadOnlyUnitOfWork", "SQLAlchemyUnitOfWork", "UnitOfWork"]
