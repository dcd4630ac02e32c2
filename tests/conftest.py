"""Fixtures giving every test its own SQLite file."""

import pytest
from fastapi.testclient import TestClient

from database import make_engine, make_session_factory
from main_db import create_app
from todo_store import ensure_schema


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite:///{tmp_path / 'todo.db'}"


@pytest.fixture
def engine(database_url):
    engine = make_engine(database_url)
    ensure_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = make_session_factory(engine)()
    yield session
    session.close()


@pytest.fixture
def app(database_url):
    return create_app(database_url)


@pytest.fixture
def client(app):
    # Lifespan runs on enter, so the table exists before the first request
    with TestClient(app, follow_redirects=False) as client:
        yield client


@pytest.fixture
def app_db(client, app):
    session = app.state.session_factory()
    yield session
    session.close()
