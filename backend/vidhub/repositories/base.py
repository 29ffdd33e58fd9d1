"""Generic repository base for SQLAlchemy 2.x.

Persistence-only concerns shared by all repositories:

- Lookups by primary key, with an optional row lock.
- Equality filters honoring a per-repository whitelist.
- Safe partial updates restricted to a per-repository updatable whitelist.

Repositories never commit or roll back. Services own transactions through a
Unit of Work.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Generic, TypeVar, cast

from sqlalchemy import Select, and_, func, select
from sqlalchemy.orm import InstrumentedAttribute, Session

from vidhub.core.extensions import db

E = TypeVar("E")  # SQLAlchemy mapped entity type


class BaseRepository(Generic[E]):
    """Generic, persistence-only repository for a single aggregate.

    Subclasses MUST define ``model`` and MAY override ``_filterable_fields``,
    ``_updatable_fields`` and ``_default_eagerload``.
    """

    #: SQLAlchemy mapped model (must be set by subclasses)
    model: type[E]

    def __init__(self, session: Session | None = None) -> None:
        """
        :param session: Session shared across the Unit of Work scope. Falls
            back to the Flask-scoped session when omitted.
        :type session: :class:`sqlalchemy.orm.Session` | None
        """
        self._session: Session | None = session

    @property
    def session(self) -> Session:
        """Return the injected session or the Flask-scoped one."""
        if self._session is not None:
            return self._session
        return cast(Session, db.session)

    # ------------------------------ Extensibility ----------------------------

    def _default_eagerload(self, stmt: Select[Any]) -> Select[Any]:
        """Attach eager-loading options to generic lookups (none by default)."""
        return stmt

    def _pk_attr(self) -> InstrumentedAttribute[Any]:
        pk_attr = getattr(self.model, "id", None)
        if pk_attr is None:
            raise RuntimeError(f"{type(self).__name__} requires a model with an 'id' column.")
        return cast(InstrumentedAttribute[Any], pk_attr)

    def _filterable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        """Whitelist of public keys usable in equality filters."""
        return {}

    def _updatable_fields(self) -> set[str]:
        """Whitelist of public keys assignable through :meth:`assign_updates`."""
        return set()

    # ------------------------------ Internals --------------------------------

    def _apply_equality_filters(
        self,
        stmt: Select[Any],
        filters: Mapping[str, Any] | None,
    ) -> Select[Any]:
        """Apply whitelisted equality filters; unknown keys raise ``ValueError``."""
        if not filters:
            return stmt
        allowed = self._filterable_fields()
        unknown = [k for k in filters if k not in allowed]
        if unknown:
            raise ValueError(f"Unknown or non-filterable fields: {unknown}")
        clauses = [allowed[k] == v for k, v in filters.items()]
        return stmt.where(and_(*clauses))

    # --------------------------------- CRUD ----------------------------------

    def add(self, instance: E) -> E:
        """Stage a new entity and flush to materialize its primary key."""
        self.session.add(instance)
        self.flush()
        return instance

    def get(self, entity_id: Any) -> E | None:
        """Retrieve a single entity by primary key, or ``None``."""
        stmt = self._default_eagerload(select(self.model).where(self._pk_attr() == entity_id))
        return cast(E | None, self.session.execute(stmt).scalars().first())

    def get_for_update(self, entity_id: Any) -> E | None:
        """
        Retrieve an entity by primary key holding a ``FOR UPDATE`` row lock.

        The lock is released when the surrounding transaction ends. Dialects
        without row locks (SQLite) silently ignore it.
        """
        stmt = self._default_eagerload(
            select(self.model).where(self._pk_attr() == entity_id)
        ).with_for_update()
        return cast(E | None, self.session.execute(stmt).scalars().first())

    def find_one(self, **filters: Any) -> E | None:
        """Find a single entity by whitelisted equality filters."""
        stmt = self._apply_equality_filters(select(self.model), filters)
        stmt = self._default_eagerload(stmt)
        return cast(E | None, self.session.execute(stmt).scalars().first())

    def count(self, **filters: Any) -> int:
        """Count rows matching whitelisted equality filters."""
        stmt = self._apply_equality_filters(select(func.count()).select_from(self.model), filters)
        return int(self.session.execute(stmt).scalar_one())

    def exists(self, **filters: Any) -> bool:
        """Return ``True`` when at least one row matches the filters."""
        stmt = self._apply_equality_filters(select(self._pk_attr()), filters)
        return self.session.execute(stmt.limit(1)).first() is not None

    def delete(self, instance: E) -> None:
        """Delete an entity and flush."""
        self.session.delete(instance)
        self.flush()

    def flush(self) -> None:
        """Flush pending changes without committing."""
        self.session.flush()

    # ----------------------------- Safe updates -------------------------------

    def assign_updates(
        self,
        instance: E,
        fields: Mapping[str, Any],
        *,
        flush: bool = True,
    ) -> E:
        """
        Assign whitelisted keys to ``instance`` and optionally flush.

        ``setattr`` is used so SQLAlchemy ``@validates`` hooks run.

        :raises ValueError: On keys outside :meth:`_updatable_fields`.
        """
        allowed = self._updatable_fields()
        unknown = [k for k in fields if k not in allowed]
        if unknown:
            raise ValueError(f"Unknown or non-updatable fields: {unknown}")
        for k, v in fields.items():
            setattr(instance, k, v)
        if flush:
            self.flush()
        return instance
