"""Persistence-only repository base shared by the identity tables.

Repositories look rows up and stage changes; the unit of work in
:mod:`app.uow` owns commit and rollback.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Generic, TypeVar, cast

from sqlalchemy import Select, and_, func, select
from sqlalchemy.orm import InstrumentedAttribute, Session

from app.core.extensions import db

E = TypeVar("E")  # SQLAlchemy mapped entity type


class BaseRepository(Generic[E]):
    """Lookups and whitelisted updates for a single mapped class.

    Subclasses set ``model`` and may widen ``_filterable_fields`` (keys
    accepted by :meth:`find_one` / :meth:`exists`) and ``_updatable_fields``
    (keys accepted by :meth:`update`).
    """

    model: type[E]

    def __init__(self, session: Session | None = None) -> None:
        """
        :param session: Session of the enclosing unit of work. Falls back to
            the Flask-scoped session when omitted.
        :type session: :class:`sqlalchemy.orm.Session` | None
        """
        self._session: Session | None = session

    @property
    def session(self) -> Session:
        if self._session is not None:
            return self._session
        return cast(Session, db.session)

    # ------------------------------ Whitelists -------------------------------

    def _filterable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        return {}

    def _updatable_fields(self) -> set[str]:
        return set()

    def _where(self, stmt: Select[Any], filters: Mapping[str, Any]) -> Select[Any]:
        """Add equality clauses for whitelisted keys; other keys are dropped."""
        allowed = self._filterable_fields()
        clauses = [allowed[k] == v for k, v in filters.items() if k in allowed]
        return stmt.where(and_(*clauses)) if clauses else stmt

    def _by_pk(self, entity_id: Any) -> Select[Any]:
        pk_attr = getattr(self.model, "id", None)
        if pk_attr is None:
            raise RuntimeError(f"{self.model.__name__} has no 'id' column to look up.")
        return select(self.model).where(pk_attr == entity_id)

    # -------------------------------- Reads ----------------------------------

    def get(self, entity_id: Any) -> E | None:
        """Return the row with primary key ``entity_id`` or ``None``."""
        return cast(E | None, self.session.execute(self._by_pk(entity_id)).scalars().first())

    def get_for_update(self, entity_id: Any) -> E | None:
        """Same as :meth:`get` but holds a ``FOR UPDATE`` row lock where supported.

        Withdrawal uses it so a concurrent status change cannot interleave.
        """
        stmt = self._by_pk(entity_id).with_for_update()
        return cast(E | None, self.session.execute(stmt).scalars().first())

    def find_one(self, **filters: Any) -> E | None:
        stmt = self._where(select(self.model), filters)
        return cast(E | None, self.session.execute(stmt).scalars().first())

    def exists(self, **filters: Any) -> bool:
        stmt = self._where(select(func.count()).select_from(self.model), filters)
        return bool(self.session.execute(stmt).scalar())

    # -------------------------------- Writes ---------------------------------

    def add(self, instance: E) -> E:
        """Stage ``instance`` and flush so its primary key is assigned."""
        self.session.add(instance)
        self.flush()
        return instance

    def update(self, instance: E, **fields: Any) -> E:
        """Assign whitelisted ``fields`` on ``instance`` and flush.

        Assignment goes through ``setattr`` so model ``@validates`` hooks run
        (nickname trimming, status coercion).

        :raises ValueError: If a key is not in ``_updatable_fields``.
        """
        allowed = self._updatable_fields()
        unknown = [k for k in fields if k not in allowed]
        if unknown:
            raise ValueError(f"Unknown or non-updatable fields: {unknown}")
        for k, v in fields.items():
            setattr(instance, k, v)
        self.flush()
        return instance

    def flush(self) -> None:
        self.session.flush()
