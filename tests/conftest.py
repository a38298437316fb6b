"""
Shared fixtures: a throwaway SQLite database and a migrations directory.
"""
import pytest
from databases import Database


@pytest.fixture
async def database(tmp_path):
    """File-backed SQLite database, connected for the duration of a test."""
    db = Database(f"sqlite:///{tmp_path / 'ledger.db'}")
    await db.connect()
    yield db
    await db.disconnect()


@pytest.fixture
def migrations_dir(tmp_path):
    path = tmp_path / "migrations"
    path.mkdir()
    return path


@pytest.fixture
def write_migration(migrations_dir):
    """Write a migration file named <version>_<name>.sql and return its path."""
    def _write(version: int, name: str, sql: str):
        path = migrations_dir / f"{version:012d}_{name}.sql"
        path.write_text(sql, encoding="utf-8")
        return path
    return _write

