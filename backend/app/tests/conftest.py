"""
Shared fixtures: an in-memory SQLite database per test with the catalog seeded.
"""
import os

# Must be set before the app settings are imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("STORAGE_RETRY_MIN_WAIT", "0")
os.environ.setdefault("STORAGE_RETRY_MAX_WAIT", "0")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.db.session import get_db, init_db
from app.db.init_db import seed_catalog
from app.services.auth_service import register_user


@pytest.fixture(scope="function")
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = factory()
    try:
        seed_catalog(session)
    finally:
        session.close()
    yield factory
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def user(db):
    return register_user("traveler@example.com", "testpassword123", "Test Traveler", db=db)


@pytest.fixture
def other_user(db):
    return register_user("someone.else@example.com", "testpassword123", db=db)


def _auth_headers(client, email):
    response = client.post(
        "/api/auth/register",
        json={"email": email, "password": "testpassword123"}
    )
    assert response.status_code == 201
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def auth_headers(client):
    return _auth_headers(client, "api.traveler@example.com")


@pytest.fixture
def other_auth_headers(client):
    return _auth_headers(client, "api.other@example.com")
