"""Pytest configuration and fixtures for testing"""

import os

# Set environment variables BEFORE importing main
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"  # bcrypt minimum, keeps hashing fast
os.environ["JWT_SECRET"] = "test-jwt-secret"
os.environ["ENVIRONMENT"] = "testing"
os.environ.pop("MONGODB_URI", None)
os.environ.pop("SENTRY_DSN", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from main import app
from core.dependencies import get_storage
from database.memory_repository import MemoryStorageRepository
from database.models import Base


# ========== Test Database Setup ==========
@pytest.fixture(scope="function")
def test_db():
    """Create a relational test database session"""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


# ========== Storage ==========
@pytest.fixture(scope="function")
def storage():
    """Fresh in-memory repository for each test"""
    return MemoryStorageRepository()


# ========== Test Client Setup ==========
@pytest.fixture(scope="function")
def client(storage):
    """Test client wired to the per-test repository"""
    app.dependency_overrides[get_storage] = lambda: storage
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def lenient_client(storage):
    """Test client that turns unhandled errors into 500 responses"""
    app.dependency_overrides[get_storage] = lambda: storage
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# ========== Auth Helpers ==========
def _signup(client, username="alice", email="alice@example.com", password="password123",
            full_name="Alice Kim"):
    return client.post("/api/auth/signup", json={
        "username": username,
        "email": email,
        "password": password,
        "fullName": full_name
    })


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def signup_user(client):
    """Sign a user up through the API; returns the response"""
    def _make(**fields):
        return _signup(client, **fields)
    return _make


@pytest.fixture
def auth_headers(client):
    """Headers for a freshly signed-up user (alice)"""
    response = _signup(client)
    assert response.status_code == 200
    return bearer(response.json()["token"])


@pytest.fixture
def other_headers(client):
    """Headers for a second user (bob)"""
    response = _signup(client, username="bob", email="bob@example.com", full_name="Bob Lee")
    assert response.status_code == 200
    return bearer(response.json()["token"])


@pytest.fixture
def sample_measurement():
    return {
        "chest": 100.0,
        "shoulders": 45.0,
        "waist": 85.0,
        "height": 175.0,
        "hips": 95.0,
        "confidence": {"chest": 95.0, "shoulders": 90.0}
    }
