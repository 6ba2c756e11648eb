import sys
from pathlib import Path as _Path
sys.path.insert(0, str(_Path(__file__).resolve().parents[1] / "src"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from myorder.app import create_app
from myorder.database import create_schema, session_factory
from myorder.store import UserStore


@pytest.fixture()
def engine():
    """In-memory SQLite shared across threads (TestClient runs handlers in a threadpool)."""
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_schema(eng)
    yield eng
    eng.dispose()


@pytest.fixture()
def store(engine) -> UserStore:
    return UserStore(session_factory(engine))


@pytest.fixture()
def app(store):
    return create_app(store)


@pytest.fixture()
def client(app) -> TestClient:
    # https so the Secure session cookie is kept and sent back by the client.
    return TestClient(app, base_url="https://testserver", follow_redirects=False)


@pytest.fixture()
def registered(store):
    """A user that already exists: (email, password)."""
    email, password = "a@x.com", "pw"
    store.create_user(email, password)
    return email, password
