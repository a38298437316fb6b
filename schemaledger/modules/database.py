"""
Process-wide database handle for the migration service.
"""
import logging
from typing import Any, Dict, Optional
from databases import Database
from schemaledger.core.migrations.exceptions import MigrationError
from schemaledger.core.migrations.migration_tracker import MigrationTracker
from schemaledger.modules.environment import get_database_url

logger = logging.getLogger("schemaledger.database.connection")


class ConnectionManager:
    """
    Owns the Database injected into the migration components.
    """

    def __init__(self, database_url: Optional[str] = None):
        self.database_url = database_url or get_database_url()
        if not self.database_url:
            raise ValueError("DATABASE_URL must be set either as parameter or environment variable")

        self.database = Database(self.database_url)

    async def connect(self) -> None:
        if not self.database.is_connected:
            await self.database.connect()
            logger.info("Database connection established")

    async def disconnect(self) -> None:
        if self.database.is_connected:
            await self.database.disconnect()
            logger.info("Database connection closed")

    def is_connected(self) -> bool:
        return self.database.is_connected

    async def health_check(self) -> Dict[str, Any]:
        """
        Check the connection and that the migrations_history ledger is readable.

        Returns:
            status is "ok" when the ledger answers, "degraded" when only the
            connection does, "unavailable" otherwise
        """
        report: Dict[str, Any] = {
            "status": "unavailable",
            "database": False,
            "ledger": False,
            "current_version": None,
        }
        if not self.is_connected():
            return report

        try:
            await self.database.fetch_val("SELECT 1")
        except Exception as e:
            logger.warning(f"Database health check failed: {e}")
            return report
        report["database"] = True

        try:
            report["current_version"] = await MigrationTracker(self.database).last_applied_version()
        except MigrationError as e:
            logger.warning(f"Migration ledger unreachable: {e}")
            report["status"] = "degraded"
            return report

        report["ledger"] = True
        report["status"] = "ok"
        return report


_connection_manager: Optional[ConnectionManager] = None


def get_connection_manager() -> ConnectionManager:
    """Process-wide connection manager, created on first use from DATABASE_URL."""
    global _connection_manager
    if _connection_manager is None:
        _connection_manager = ConnectionManager()
    return _connection_manager


async def connect_to_db():
    await get_connection_manager().connect()


async def disconnect_from_db():
    if _connection_manager is not None:
        await _connection_manager.disconnect()
