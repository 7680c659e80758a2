"""Test configuration and fixtures for Wishcard tests."""

import os
import sys
import tempfile
from pathlib import Path
from typing import Generator

# Settings are read at import time, so configure them before importing the app
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="wishcard-uploads-")
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["ADMIN_KEY"] = "test-admin-key"
os.environ["ADMIN_EMAIL"] = "admin@example.com"
os.environ["ADMIN_PASS"] = "admin-pass"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from wishcard.database import Base, get_db
from wishcard.main import app
from wishcard.config import settings


# Create in-memory SQLite database for testing
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

ADMIN_KEY = "test-admin-key"


@pytest.fixture(scope="function")
def test_db() -> Generator[Session, None, None]:
    """Create a fresh test database for each test."""
    # Create all tables
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        # Drop all tables after test
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def upload_dir(tmp_path, monkeypatch) -> Path:
    """Point the upload directory at a per-test temporary directory."""
    path = tmp_path / "uploads"
    path.mkdir()
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(path))
    return path


@pytest.fixture(scope="function")
def client(test_db: Session, upload_dir: Path) -> Generator[TestClient, None, None]:
    """Create a test client with test database override."""

    def override_get_db():
        try:
            yield test_db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def register_and_login(client: TestClient):
    """Register a user and return an ``authorization`` header for them."""

    def _register_and_login(email: str = "alice@example.com", password: str = "secret1", name: str = "Alice") -> dict:
        response = client.post("/api/register", json={"name": name, "email": email, "password": password})
        assert response.status_code == 200, response.text
        response = client.post("/api/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        return {"authorization": response.json()["token"]}

    return _register_and_login


@pytest.fixture
def admin_headers() -> dict:
    return {"x-admin-key": ADMIN_KEY}


@pytest.fixture
def temp_image_file():
    """Create an in-memory PNG image for upload tests."""
    from PIL import Image
    import io

    # Create a simple test image
    img = Image.new("RGB", (100, 100), color="red")
    img_bytes = io.BytesIO()
    img.save(img_bytes, format="PNG")
    img_bytes.seek(0)

    return img_bytes
