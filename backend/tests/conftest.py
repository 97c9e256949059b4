"""Pytest fixtures: app, transactional database layer, fake Redis and token helpers.

Each test runs inside a SAVEPOINT-backed transaction against an in-memory
SQLite database so data changes never leak between cases. Redis is replaced
by a fresh ``fakeredis`` instance per test.
"""

from __future__ import annotations

import os

import fakeredis
import pytest
from app.core.config import TestingConfig
from app.core.extensions import db as _db  # Flask-SQLAlchemy instance
from app.core.extensions import set_redis
from app.factory import create_app  # application factory under test
from app.infra.jwt.flask_jwt_token_provider import JWTTokenProvider
from app.services.tokens.dto import TokenSettings
from app.services.tokens.service import TokenService
from sqlalchemy import event
from sqlalchemy.orm import scoped_session, sessionmaker


@pytest.fixture(scope="session")
def app():
    """Create a Flask application configured for testing.

    Returns
    -------
    flask.Flask
        Application instance with :class:`TestingConfig` applied and logging
        noise reduced.
    """
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    app = create_app(TestingConfig)
    app.logger.setLevel("WARNING")
    return app


@pytest.fixture(scope="session")
def db(app):
    """Create database tables once per test session.

    Parameters
    ----------
    app: flask.Flask
        Application fixture ensuring the Flask context is available.

    Yields
    ------
    flask_sqlalchemy.SQLAlchemy
        Database extension bound to the testing application.
    """
    with app.app_context():
        _db.create_all()
        yield _db
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope="session")
def connection(db):
    """Keep a dedicated DBAPI connection open for the whole session."""
    conn = db.engine.connect()
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="function")
def session(db, connection):
    """Provide a SQLAlchemy session wrapped in a nested transaction.

    Notes
    -----
    The fixture mirrors the SQLAlchemy 2.0 pattern for transactional tests: it
    begins a top-level transaction, starts a SAVEPOINT per test, and reinstalls
    the SAVEPOINT whenever SQLAlchemy ends one. Unit of Work commits therefore
    only release the SAVEPOINT.
    """
    # 1) Top-level transaction
    top_trans = connection.begin()

    # 2) Scoped session bound to the connection
    SessionFactory = sessionmaker(bind=connection, future=True)
    scoped = scoped_session(SessionFactory)

    # 3) SAVEPOINT per test
    nested = connection.begin_nested()

    # 4) Re-create SAVEPOINT when the previous nested transaction ends
    @event.listens_for(scoped(), "after_transaction_end")
    def _restart_savepoint(sess, trans):  # pragma: no cover
        if trans.nested and not trans._parent.nested:
            nonlocal nested
            nested = connection.begin_nested()

    # 5) Monkey-patch db.session so app code uses this scoped session
    original_session = db.session
    db.session.remove()
    db.session = scoped

    try:
        yield scoped
    finally:
        scoped.remove()
        db.session = original_session
        top_trans.rollback()


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


@pytest.fixture
def redis_client(app):
    """Install a fresh FakeRedis client on the app for the duration of a test."""
    r = fakeredis.FakeRedis()
    set_redis(app, r)
    yield r
    r.flushall()


@pytest.fixture
def client(app, redis_client):
    """Flask test client backed by FakeRedis and the transactional session."""
    return app.test_client()


@pytest.fixture
def tokens(app) -> TokenService:
    """Token service signing with the testing JWT secret."""
    return TokenService(
        token_provider=JWTTokenProvider(),
        settings=TokenSettings.from_config(app.config),
    )


@pytest.fixture
def freeze_time():
    """Factory returning :func:`freezegun.freeze_time` for token expiry tests."""
    from freezegun import freeze_time as _freeze_time

    def _factory(target: str | None = None):
        return _freeze_time(target or "2026-01-01 12:00:00")

    return _factory


# -- Hook up Factory Boy to pytest SQLAlchemy session --------------------------
@pytest.fixture(autouse=True)
def _factories_session(session):
    """Wire Factory Boy's session helper to the transactional session fixture."""
    from tests.factories import SQLAlchemySession

    SQLAlchemySession.set(session)
    yield
