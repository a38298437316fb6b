import argparse
import asyncio
import logging
import sys
from schemaledger.core.migrations.exceptions import MigrationError
from schemaledger.modules.database import get_connection_manager
from schemaledger.services.database.migration_orchestrator import MigrationOrchestrator


async def main(directory=None) -> int:
    manager = get_connection_manager()
    print("🚀 Connecting to DB...")
    await manager.connect()
    try:
        print("▶️ Running Migrations...")
        applied = await MigrationOrchestrator(manager.database).migrate(directory)
        print(f"✅ {applied} migrations applied.")
        return 0
    except MigrationError as e:
        print(f"❌ Migration failed: {e}")
        return 1
    finally:
        await manager.disconnect()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Apply pending database migrations")
    parser.add_argument("directory", nargs="?", help="Migrations directory (defaults to MIGRATIONS_DIR)")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    sys.exit(asyncio.run(main(args.directory)))
