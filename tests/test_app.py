"""
Startup wiring: connect, migrate on startup, serve status.
"""
import pytest
from fastapi.testclient import TestClient
from schemaledger.modules import database as database_module


@pytest.fixture
def app_env(monkeypatch, tmp_path, migrations_dir, write_migration):
    write_migration(201701261850, "create_users", "CREATE TABLE users (id INTEGER PRIMARY KEY);")
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'app.db'}")
    monkeypatch.setenv("MIGRATIONS_DIR", str(migrations_dir))
    monkeypatch.setattr(database_module, "_connection_manager", None)


def test_startup_runs_migrations_when_enabled(app_env, monkeypatch):
    monkeypatch.setenv("RUN_MIGRATIONS_ON_STARTUP", "true")
    from schemaledger.app import app

    with TestClient(app) as client:
        health = client.get("/health").json()
        body = client.get("/api/system/migrations").json()

    assert health["status"] == "ok"
    assert health["current_version"] == 201701261850
    assert body["applied_count"] == 1
    assert body["pending_count"] == 0
    assert body["current_version"] == 201701261850


def test_startup_leaves_migrations_pending_by_default(app_env, monkeypatch):
    monkeypatch.delenv("RUN_MIGRATIONS_ON_STARTUP", raising=False)
    from schemaledger.app import app

    with TestClient(app) as client:
        before = client.get("/api/system/migrations").json()
        migrated = client.post("/api/system/migrate").json()

    assert before["pending_count"] == 1
    assert migrated["applied"] == 1
