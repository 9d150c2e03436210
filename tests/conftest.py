"""Pytest configuration and shared fixtures"""
import pytest
from fastapi.testclient import TestClient

from user_manager_api.app.core.config import settings
from user_manager_api.app.core.db import init_db
from user_manager_api.app.main import app


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    """Point the store at a fresh SQLite file for each test"""
    path = tmp_path / "users.db"
    monkeypatch.setattr(settings, "database_url", str(path))
    init_db()
    return path


@pytest.fixture
def client(db_path):
    """TestClient running the app lifespan against the temporary database"""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def alice():
    return {"name": "Alice", "email": "a@x.com"}
