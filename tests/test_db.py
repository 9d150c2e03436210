"""Tests for database path resolution and startup migrations"""
import os
import sqlite3

import pytest

from user_manager_api.app.core import db
from user_manager_api.app.core.config import settings
from user_manager_api.app.core.errors import StoreConnectionError


def test_absolute_path_is_used_as_is(tmp_path, monkeypatch):
    path = str(tmp_path / "users.db")
    monkeypatch.setattr(settings, "database_url", path)
    assert db.get_database_path() == path


def test_sqlite_url_prefix_is_stripped(tmp_path, monkeypatch):
    path = str(tmp_path / "users.db")
    monkeypatch.setattr(settings, "database_url", f"sqlite:///{path}")
    assert db.get_database_path() == path


def test_relative_path_is_resolved_against_package_root(monkeypatch):
    monkeypatch.setattr(settings, "database_url", "users.db")
    resolved = db.get_database_path()
    assert os.path.isabs(resolved)
    assert resolved.endswith(os.path.join("user_manager_api", "users.db"))


def test_init_db_creates_users_table(db_path):
    conn = sqlite3.connect(db_path)
    try:
        columns = [row[1] for row in conn.execute("PRAGMA table_info(users)")]
        version = conn.execute("SELECT MAX(version) FROM migrations").fetchone()[0]
    finally:
        conn.close()
    assert columns == ["id", "name", "email"]
    assert version == len(db.MIGRATIONS)


def test_init_db_is_idempotent(db_path):
    db.init_db()
    conn = sqlite3.connect(db_path)
    try:
        count = conn.execute("SELECT COUNT(*) FROM migrations").fetchone()[0]
    finally:
        conn.close()
    assert count == len(db.MIGRATIONS)


def test_unreachable_database_raises(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "database_url", str(tmp_path / "missing" / "users.db"))
    with pytest.raises(StoreConnectionError):
        db.init_db()
