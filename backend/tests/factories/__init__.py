"""Factory Boy base wiring for the identity tables."""

from __future__ import annotations

import factory


class SQLAlchemySession:
    """Holder for the SAVEPOINT-bound session installed by ``conftest``."""

    _session = None

    @classmethod
    def set(cls, session):
        cls._session = session

    @classmethod
    def get(cls):
        """Return the session factories persist users and pets into.

        Raises
        ------
        RuntimeError
            If a factory runs in a test that does not request ``session``.
        """
        if cls._session is None:
            raise RuntimeError("Factories session not set. Did you pass the 'session' fixture?")
        return cls._session


class BaseFactory(factory.alchemy.SQLAlchemyModelFactory):
    """Flush-only factory so rows vanish with the test transaction."""

    class Meta:
        abstract = True
        # Callable so the session is looked up per build, not at import time
        sqlalchemy_session_factory = SQLAlchemySession.get
        sqlalchemy_session_persistence = "flush"
