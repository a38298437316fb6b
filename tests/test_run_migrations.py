"""
Tests for the run_migrations command-line entry point.
"""
import pytest
import run_migrations
from schemaledger.modules.database import ConnectionManager
from db_helpers import ledger_versions


@pytest.fixture
def manager(monkeypatch, tmp_path):
    manager = ConnectionManager(f"sqlite:///{tmp_path / 'cli.db'}")
    monkeypatch.setattr(run_migrations, "get_connection_manager", lambda: manager)
    return manager


@pytest.mark.asyncio
async def test_main_returns_zero_on_success(manager, migrations_dir, write_migration):
    write_migration(1, "create_users", "CREATE TABLE users (id INTEGER PRIMARY KEY);")

    assert await run_migrations.main(str(migrations_dir)) == 0
    assert not manager.is_connected()

    await manager.connect()
    try:
        assert await ledger_versions(manager.database) == [1]
    finally:
        await manager.disconnect()


@pytest.mark.asyncio
async def test_main_returns_one_on_failed_migration(manager, migrations_dir, write_migration, capsys):
    write_migration(1, "create_users", "CREATE TABLE users (id INTEGER PRIMARY KEY);")
    write_migration(2, "broken", "SELECT * FROM nowhere;")

    assert await run_migrations.main(str(migrations_dir)) == 1
    assert not manager.is_connected()
    assert "000000000002_broken.sql" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_main_returns_one_on_bad_file_name(manager, migrations_dir):
    (migrations_dir / "2024_bad.sql").write_text("SELECT 1;")

    assert await run_migrations.main(str(migrations_dir)) == 1
