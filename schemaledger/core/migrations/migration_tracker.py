"""
Migration Tracker

Owns the migrations_history ledger: which versions have been applied to the
database. The ledger is append-only; rows are never updated or deleted.
"""
import logging
from typing import Iterable, List, Optional, Set
from datetime import datetime
from databases import Database
from databases.core import Connection
from schemaledger.core.migrations.migration_models import AppliedRecord
from schemaledger.core.migrations.exceptions import (
    DuplicateVersion,
    LedgerBootstrapError,
    LedgerRecordError,
    PendingResolutionError,
)

logger = logging.getLogger("schemaledger.migrations.tracker")

LEDGER_TABLE = "migrations_history"
LEGACY_TABLE = "schema_migrations"


class MigrationTracker:
    """
    Tracks applied migrations in the database.
    """

    # CURRENT_TIMESTAMP is NOW() on PostgreSQL and also valid on SQLite
    CREATE_LEDGER_SQL = f"""
    CREATE TABLE IF NOT EXISTS {LEDGER_TABLE} (
        version     BIGINT PRIMARY KEY,
        filename    VARCHAR(100) NULL,
        date        TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
    )
    """

    def __init__(self, database: Database):
        """
        Initialize migration tracker.

        Args:
            database: Database instance
        """
        self.database = database

    async def ensure_ledger(self) -> None:
        """
        Create the migrations_history table if it doesn't exist.
        """
        try:
            await self.database.execute(self.CREATE_LEDGER_SQL)
            logger.debug("Migration ledger table created/verified")
        except Exception as e:
            logger.error(f"Failed to create migration ledger table: {e}")
            raise LedgerBootstrapError(f"failed to create {LEDGER_TABLE} table: {e}") from e

    async def last_applied_version(self) -> Optional[int]:
        """
        Get the highest version recorded in the ledger.

        Falls back to the legacy schema_migrations table when the ledger is empty.

        Returns:
            Last applied version, or None if nothing has been applied
        """
        try:
            last_version = await self.database.fetch_val(
                f"SELECT MAX(version) FROM {LEDGER_TABLE}"
            )
        except Exception as e:
            raise PendingResolutionError(f"failed to get last migration record: {e}") from e

        if last_version is not None:
            return int(last_version)

        return await self.legacy_last_version()

    async def legacy_last_version(self) -> Optional[int]:
        """
        Advisory lookup of the version stored in the deprecated
        schema_migrations table.

        Returns:
            The legacy version, or None when the table is missing, empty or unreadable
        """
        try:
            value = await self.database.fetch_val(f"SELECT version FROM {LEGACY_TABLE} LIMIT 1")
            if value is None:
                return None
            return int(value)
        except Exception as e:
            logger.debug(f"No legacy version found in {LEGACY_TABLE}: {e}")
            return None

    async def applied_versions(self, candidates: Iterable[int]) -> Set[int]:
        """
        Get the subset of candidate versions that are already in the ledger.

        Args:
            candidates: Versions to check

        Returns:
            Set of candidate versions that have been applied
        """
        versions = sorted(set(candidates))
        if not versions:
            return set()

        placeholders = ", ".join(f":v{i}" for i in range(len(versions)))
        query = f"SELECT version FROM {LEDGER_TABLE} WHERE version IN ({placeholders})"
        values = {f"v{i}": version for i, version in enumerate(versions)}

        try:
            rows = await self.database.fetch_all(query, values)
        except Exception as e:
            raise PendingResolutionError(f"failed to get applied migrations: {e}") from e

        return {int(row["version"]) for row in rows}

    async def record(
        self,
        version: int,
        file_name: str,
        connection: Optional[Connection] = None,
    ) -> None:
        """
        Record a migration as applied.

        Args:
            version: Migration version
            file_name: Migration file name
            connection: Connection holding the migration's transaction, if any

        Raises:
            DuplicateVersion: If the version is already in the ledger
            LedgerRecordError: If the insert fails
        """
        query = f"""
        INSERT INTO {LEDGER_TABLE} (version, filename)
        VALUES (:version, :filename)
        ON CONFLICT (version) DO NOTHING
        RETURNING version
        """
        executor = connection if connection is not None else self.database

        try:
            row = await executor.fetch_one(query, {"version": version, "filename": file_name})
        except Exception as e:
            raise LedgerRecordError(
                f"failed to record migration: {e}",
                file_name=file_name,
                version=version,
            ) from e

        if row is None:
            raise DuplicateVersion(
                "migration is already recorded in the ledger",
                file_name=file_name,
                version=version,
            )

        logger.debug(f"Recorded migration {version:012d}: {file_name}")

    async def list_applied(self) -> List[AppliedRecord]:
        """
        Get every ledger row, ordered by version.
        """
        try:
            rows = await self.database.fetch_all(
                f"SELECT version, filename, date FROM {LEDGER_TABLE} ORDER BY version"
            )
        except Exception as e:
            raise PendingResolutionError(f"failed to list applied migrations: {e}") from e

        return [
            AppliedRecord(
                version=int(row["version"]),
                filename=row["filename"],
                applied_at=_as_datetime(row["date"]),
            )
            for row in rows
        ]


def _as_datetime(value) -> Optional[datetime]:
    # SQLite hands timestamps back as text
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))
