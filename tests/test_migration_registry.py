"""
Unit tests for migration discovery.
"""
import pytest
from schemaledger.core.migrations.migration_registry import MigrationRegistry
from schemaledger.core.migrations.exceptions import (
    DiscoveryError,
    DuplicateVersionInDirectory,
    InvalidVersionFormat,
    InvalidVersionValue,
)


def test_discover_migrations_sorted_by_version(migrations_dir, write_migration):
    write_migration(201703240709, "add_tags", "SELECT 1;")
    write_migration(201701261850, "create_users", "SELECT 1;")
    write_migration(201702072040, "create_ideas", "SELECT 1;")

    migrations = MigrationRegistry(str(migrations_dir)).discover_migrations()

    assert [m.version for m in migrations] == [201701261850, 201702072040, 201703240709]
    assert migrations[0].file_name == "201701261850_create_users.sql"
    assert migrations[0].path == migrations_dir / "201701261850_create_users.sql"


def test_discover_migrations_empty_directory(migrations_dir):
    assert MigrationRegistry(str(migrations_dir)).discover_migrations() == []


def test_discover_migrations_ignores_subdirectories_and_dotfiles(migrations_dir, write_migration):
    write_migration(1, "init", "SELECT 1;")
    (migrations_dir / ".gitkeep").write_text("")
    (migrations_dir / "archive").mkdir()

    migrations = MigrationRegistry(str(migrations_dir)).discover_migrations()

    assert [m.file_name for m in migrations] == ["000000000001_init.sql"]


def test_discover_migrations_missing_directory(tmp_path):
    missing = tmp_path / "does-not-exist"

    with pytest.raises(DiscoveryError) as exc_info:
        MigrationRegistry(str(missing)).discover_migrations()
    assert exc_info.value.directory == str(missing)


def test_discover_migrations_bad_length_aborts(migrations_dir, write_migration):
    write_migration(1, "init", "SELECT 1;")
    (migrations_dir / "2024_bad.sql").write_text("SELECT 1;")

    with pytest.raises(InvalidVersionFormat) as exc_info:
        MigrationRegistry(str(migrations_dir)).discover_migrations()
    assert exc_info.value.directory == str(migrations_dir)
    assert exc_info.value.file_name == "2024_bad.sql"


def test_discover_migrations_non_numeric_aborts(migrations_dir):
    (migrations_dir / "20240115abcd_bad.sql").write_text("SELECT 1;")

    with pytest.raises(InvalidVersionValue):
        MigrationRegistry(str(migrations_dir)).discover_migrations()


def test_discover_migrations_rejects_non_migration_files(migrations_dir, write_migration):
    write_migration(1, "init", "SELECT 1;")
    (migrations_dir / "README.md").write_text("notes")

    with pytest.raises(InvalidVersionFormat):
        MigrationRegistry(str(migrations_dir)).discover_migrations()


def test_discover_migrations_duplicate_version(migrations_dir, write_migration):
    write_migration(5, "create_users", "SELECT 1;")
    write_migration(5, "create_ideas", "SELECT 1;")

    with pytest.raises(DuplicateVersionInDirectory) as exc_info:
        MigrationRegistry(str(migrations_dir)).discover_migrations()
    assert exc_info.value.version == 5
    assert "000000000005_create_ideas.sql" in str(exc_info.value)
    assert "000000000005_create_users.sql" in str(exc_info.value)
