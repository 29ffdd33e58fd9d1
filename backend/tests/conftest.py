"""Pytest fixtures configuring an isolated transactional database layer.

Each test runs inside a SAVEPOINT-backed transaction against an in-memory
SQLite database so data changes never leak between cases. Sessions join the
connection with their own SAVEPOINT, so service-level ``commit()`` and
``rollback()`` never escape the per-test transaction.
"""

from __future__ import annotations

import os

import pytest
from sqlalchemy import event
from sqlalchemy.orm import scoped_session, sessionmaker

from vidhub.core.config import TestingConfig
from vidhub.core.extensions import db as _db  # Flask-SQLAlchemy instance
from vidhub.factory import create_app  # application factory under test
from vidhub.services._shared.ports import (
    InMemoryDenylistStore,
    StubMediaUploader,
    StubTokenProvider,
)


class TestConfig(TestingConfig):
    """Testing configuration for creating the Flask app.

    Notes
    -----
    - Uses an in-memory SQLite database for speed.
    - Keeps Redis, the media host and the startup DB check out of the loop.
    """

    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    ACCESS_TOKEN_SECRET = "test-access-secret"
    REFRESH_TOKEN_SECRET = "test-refresh-secret"
    JWT_SECRET_KEY = ACCESS_TOKEN_SECRET
    LOG_LEVEL = "WARNING"


@pytest.fixture(scope="session")
def app(tmp_path_factory):
    """Create a Flask application configured for testing.

    Returns
    -------
    flask.Flask
        Application instance with :class:`TestConfig` applied.
    """
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    TestConfig.UPLOAD_TEMP_DIR = str(tmp_path_factory.mktemp("uploads"))
    app = create_app(TestConfig, instance_relative_config=False)
    app.logger.setLevel("WARNING")
    return app


@pytest.fixture(scope="session")
def db(app):
    """Create database tables once per test session.

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
    Begins a top-level transaction and a SAVEPOINT per test, then swaps
    ``db.session`` so application code uses the test-bound scoped session.
    Everything is rolled back when the test ends.
    """
    top_trans = connection.begin()

    SessionFactory = sessionmaker(
        bind=connection,
        future=True,
        join_transaction_mode="create_savepoint",
    )
    scoped = scoped_session(SessionFactory)

    nested = connection.begin_nested()

    @event.listens_for(scoped(), "after_transaction_end")
    def _restart_savepoint(sess, trans):  # pragma: no cover
        nonlocal nested
        if not nested.is_active:
            nested = connection.begin_nested()

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


# -- Hook up Factory Boy to pytest SQLAlchemy session --------------------------
@pytest.fixture(autouse=True)
def _factories_session(session):
    """Wire Factory Boy's session helper to the transactional session fixture."""
    from tests.factories import SQLAlchemySession

    SQLAlchemySession.set(session)
    yield


# -- Ports ---------------------------------------------------------------------
@pytest.fixture()
def token_provider():
    return StubTokenProvider()


@pytest.fixture()
def denylist():
    return InMemoryDenylistStore()


@pytest.fixture()
def uploader():
    return StubMediaUploader()


@pytest.fixture()
def staged_file(tmp_path):
    """Return a factory writing a small file and returning its path."""

    def _make(name: str = "avatar.png", content: bytes = b"\x89PNG fake") -> str:
        path = tmp_path / name
        path.write_bytes(content)
        return str(path)

    return _make


# -- HTTP ----------------------------------------------------------------------
@pytest.fixture()
def media_stub(app):
    """Replace the media host adapter with an in-process stub for one test."""
    original = app.extensions["media_uploader"]
    stub = StubMediaUploader()
    app.extensions["media_uploader"] = stub
    try:
        yield stub
    finally:
        app.extensions["media_uploader"] = original


@pytest.fixture()
def client(app, session, media_stub):
    """Flask test client bound to the transactional session."""
    app.extensions["denylist_store"] = InMemoryDenylistStore()
    return app.test_client()
