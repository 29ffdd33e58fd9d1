"""
SQLAlchemy implementations of :class:`~vidhub.uow.base.UnitOfWork` for Flask.
"""

from __future__ import annotations

from contextlib import suppress

from sqlalchemy import event
from sqlalchemy.engine import Connection
from sqlalchemy.exc import InvalidRequestError
from sqlalchemy.orm import Session, SessionTransaction

from vidhub.core.extensions import db
from vidhub.repositories import SubscriptionRepository, UserRepository, VideoRepository
from vidhub.uow.base import UnitOfWork


class SQLAlchemyRepositoryContainer:
    """Repositories sharing one SQLAlchemy session."""

    def __init__(self, *, session: Session) -> None:
        self.session = session
        self.users = UserRepository(session=self.session)
        self.subscriptions = SubscriptionRepository(session=self.session)
        self.videos = VideoRepository(session=self.session)


class SQLAlchemyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    Read-write UoW over the Flask-scoped session.

    Commits when the block exits cleanly and rolls back otherwise, so a
    failed use-case leaves no partial writes behind.
    """

    def __init__(self) -> None:
        super().__init__(session=db.session)

    def __enter__(self) -> SQLAlchemyUnitOfWork:
        # The session begins lazily on first use.
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            try:
                self.commit()
            except Exception:
                self.rollback()
                raise
        else:
            self.rollback()

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


class SQLAlchemyReadOnlyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    Read-only UoW over the Flask-scoped session.

    Owns a fresh transaction when none is active and rolls it back on exit.
    When a transaction is already running (an outer request scope or a test
    fixture) it attaches to it and leaves it untouched. In both cases ORM
    flushes and raw DML are blocked for the duration of the block.
    """

    _WRITE_PREFIXES = (
        "insert",
        "update",
        "delete",
        "merge",
        "alter",
        "drop",
        "truncate",
        "create",
        "replace",
    )

    def __init__(self) -> None:
        super().__init__(session=db.session)
        self._conn: Connection | None = None
        self._txn_ctx: SessionTransaction | None = None
        self._listeners_installed = False

    def __enter__(self) -> SQLAlchemyReadOnlyUnitOfWork:
        self._txn_ctx = None
        try:
            txn_ctx = self.session.begin()
            txn_ctx.__enter__()
            self._txn_ctx = txn_ctx
        except InvalidRequestError:
            # Already inside a transaction: attach without owning it.
            pass

        self._conn = self.session.connection()
        self._install_listeners()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if self._txn_ctx is not None:
                with suppress(Exception):
                    self.session.rollback()
                try:
                    self._txn_ctx.__exit__(exc_type, exc, tb)
                finally:
                    self._txn_ctx = None
        finally:
            self._remove_listeners()
            self._conn = None

    def commit(self) -> None:
        """
        :raises RuntimeError: always; this scope never writes.
        """
        raise RuntimeError("Read-only UnitOfWork does not allow commit().")

    def rollback(self) -> None:
        self.session.rollback()

    # ----------------------------- Guards ----------------------------------

    def _install_listeners(self) -> None:
        if self._listeners_installed:
            return

        def _before_flush(session, flush_context, instances):
            if session.new or session.dirty or session.deleted:
                raise RuntimeError("Read-only UnitOfWork: ORM flush blocked.")

        def _before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
            first_token = statement.lstrip().split(None, 1)[0].lower() if statement else ""
            if first_token.startswith(self._WRITE_PREFIXES):
                raise RuntimeError(
                    f"Read-only UnitOfWork: SQL statement blocked: {first_token.upper()}"
                )

        event.listen(self.session, "before_flush", _before_flush)
        target = self._conn if self._conn is not None else self.session.get_bind()
        event.listen(target, "before_cursor_execute", _before_cursor_execute)

        self._ro_before_flush = _before_flush
        self._ro_before_cursor_execute = _before_cursor_execute
        self._listeners_installed = True

    def _remove_listeners(self) -> None:
        if not self._listeners_installed:
            return
        with suppress(Exception):
            event.remove(self.session, "before_flush", self._ro_before_flush)
        with suppress(Exception):
            target = self._conn if self._conn is not None else self.session.get_bind()
            event.remove(target, "before_cursor_execute", self._ro_before_cursor_execute)
        self._listeners_installed = False
