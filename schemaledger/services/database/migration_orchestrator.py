"""
Migration Orchestrator

Discovers migration files and applies the pending ones in version order.
"""
import logging
from typing import Dict, Optional
from databases import Database
from schemaledger.core.migrations.migration_registry import MigrationRegistry
from schemaledger.core.migrations.migration_tracker import MigrationTracker
from schemaledger.core.migrations.migration_models import MigrationFile, MigrationStatusReport
from schemaledger.core.migrations.pending_resolver import resolve_pending
from schemaledger.core.migrations.exceptions import FileReadError, MigrationError
from schemaledger.services.database.migration_runner import MigrationRunner
from schemaledger.modules.environment import get_migrations_dir, resolve_path

logger = logging.getLogger("schemaledger.database.migrations")


class MigrationOrchestrator:
    """
    Drives a migration run: discover, resolve, apply.

    A run stops at the first failure. Versions applied before it stay
    committed; later versions are not attempted.
    """

    def __init__(self, database: Database, migrations_dir: Optional[str] = None):
        """
        Initialize migration orchestrator.

        Args:
            database: Database instance
            migrations_dir: Optional path to migrations directory. Defaults to MIGRATIONS_DIR
        """
        self.database = database
        self.migrations_dir = migrations_dir
        self.tracker = MigrationTracker(database)
        self.runner = MigrationRunner(database, self.tracker)

    def _resolve_directory(self, directory: Optional[str]) -> str:
        path = directory or self.migrations_dir
        if path is None:
            return get_migrations_dir()
        return resolve_path(path)

    async def migrate(self, directory: Optional[str] = None) -> int:
        """
        Apply all pending migrations.

        Args:
            directory: Migrations directory for this run, overriding the configured one

        Returns:
            Number of migrations applied in this run

        Raises:
            MigrationError: On the first failure; the run is aborted
        """
        path = self._resolve_directory(directory)
        logger.info(f"Running migrations from {path}...")
        try:
            return await self._migrate(path)
        except MigrationError as e:
            raise e.in_directory(path)

    async def _migrate(self, path: str) -> int:
        migrations = MigrationRegistry(path).discover_migrations()
        by_version: Dict[int, MigrationFile] = {m.version: m for m in migrations}

        await self.tracker.ensure_ledger()

        if not migrations:
            logger.info("Migrations are already up to date.")
            return 0

        last_version = await self.tracker.last_applied_version()
        logger.info(f"Current version is {last_version or 0}")

        pending_versions = await resolve_pending(sorted(by_version), self.tracker)

        executed = 0
        for version in pending_versions:
            migration = by_version[version]
            logger.info(f"Running version {version} ({migration.file_name})")

            script = self._read_migration_file(migration, path)
            try:
                await self.runner.apply(version, migration.file_name, script)
            except MigrationError as e:
                logger.error(f"Migration run aborted after {executed} applied: {e}")
                raise
            except Exception as e:
                logger.error(f"Migration run aborted after {executed} applied: {e}")
                raise MigrationError(
                    f"failed to run migration: {e}",
                    directory=path,
                    file_name=migration.file_name,
                    version=version,
                ) from e
            executed += 1

        if executed > 0:
            logger.info(f"{executed} migrations have been applied.")
        else:
            logger.info("Migrations are already up to date.")
        return executed

    async def status(self, directory: Optional[str] = None) -> MigrationStatusReport:
        """
        Report applied and pending migrations without applying anything.

        Args:
            directory: Migrations directory, overriding the configured one

        Returns:
            MigrationStatusReport for the directory
        """
        path = self._resolve_directory(directory)
        try:
            return await self._status(path)
        except MigrationError as e:
            raise e.in_directory(path)

    async def _status(self, path: str) -> MigrationStatusReport:
        migrations = MigrationRegistry(path).discover_migrations()
        by_version = {m.version: m for m in migrations}

        await self.tracker.ensure_ledger()

        applied = await self.tracker.list_applied()
        pending_versions = await resolve_pending(sorted(by_version), self.tracker)
        current_version = await self.tracker.last_applied_version()

        return MigrationStatusReport(
            directory=path,
            discovered_count=len(migrations),
            current_version=current_version,
            applied=applied,
            pending=[by_version[version] for version in pending_versions],
        )

    def _read_migration_file(self, migration: MigrationFile, path: str) -> str:
        """
        Read SQL content from migration file.

        Raises:
            FileReadError: If the file vanished or cannot be decoded
        """
        try:
            return migration.read()
        except (OSError, UnicodeDecodeError) as e:
            raise FileReadError(
                f"failed to read file '{migration.path}': {e}",
                directory=path,
                file_name=migration.file_name,
                version=migration.version,
            ) from e
