"""
Migration Runner

Applies a single migration script and records it in the ledger, atomically.
"""
import logging
from typing import List
from databases import Database
from databases.core import Connection
from schemaledger.core.migrations.migration_tracker import MigrationTracker
from schemaledger.core.migrations.exceptions import ScriptExecutionError

logger = logging.getLogger("schemaledger.migrations.runner")

# Dialects whose driver accepts a multi-statement script in one call
MULTI_STATEMENT_DIALECTS = ("postgresql", "postgres")


class MigrationRunner:
    """
    Executes one migration per transaction.

    The script's effects and its ledger row are committed together or not at all.
    """

    def __init__(self, database: Database, tracker: MigrationTracker):
        """
        Initialize migration runner.

        Args:
            database: Database instance
            tracker: Ledger the applied version is recorded in
        """
        self.database = database
        self.tracker = tracker

    async def apply(self, version: int, file_name: str, script: str) -> None:
        """
        Execute a migration script and record it.

        Args:
            version: Migration version
            file_name: Migration file name, stored in the ledger
            script: Full script content, executed verbatim

        Raises:
            ScriptExecutionError: If the script fails; nothing is committed
            LedgerRecordError: If the ledger row cannot be written; nothing is committed
        """
        async with self.database.connection() as connection:
            async with connection.transaction():
                await self._execute_script(connection, version, file_name, script)
                await self.tracker.record(version, file_name, connection=connection)

        logger.info(f"✅ Migration {version:012d} applied successfully: {file_name}")

    async def _execute_script(
        self,
        connection: Connection,
        version: int,
        file_name: str,
        script: str,
    ) -> None:
        if not script.strip():
            logger.warning(f"Migration {version:012d} is empty: {file_name}")
            return

        raw_connection = connection.raw_connection

        if self.database.url.dialect in MULTI_STATEMENT_DIALECTS:
            statements = [script]
        else:
            statements = split_statements(script)

        for i, statement in enumerate(statements, 1):
            try:
                await raw_connection.execute(statement)
                logger.debug(f"  Executed statement {i}/{len(statements)}")
            except Exception as e:
                error_msg = f"failed to execute statement {i}/{len(statements)}: {e}"
                logger.error(f"Migration {version:012d} error: {error_msg}")
                raise ScriptExecutionError(error_msg, file_name=file_name, version=version) from e


def split_statements(script: str) -> List[str]:
    """
    Split a script on semicolons for drivers that run one statement per call.

    Semicolons inside string literals or function bodies are not understood.
    """
    return [stmt.strip() for stmt in script.split(";") if stmt.strip()]
