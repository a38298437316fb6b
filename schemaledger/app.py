from fastapi import FastAPI
from contextlib import asynccontextmanager
from schemaledger.modules.system_endpoints import router as system_router
from schemaledger.modules.database import connect_to_db, disconnect_from_db, get_connection_manager
from schemaledger.modules.environment import migrate_on_startup
from schemaledger.services.database.migration_orchestrator import MigrationOrchestrator


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    await connect_to_db()
    if migrate_on_startup():
        await MigrationOrchestrator(get_connection_manager().database).migrate()
    yield
    # Shutdown
    await disconnect_from_db()


app = FastAPI(title="Schema Ledger", version="0.1.0", lifespan=lifespan)

app.include_router(system_router)


@app.get("/")
async def root():
    return {"status": "online", "system": "Schema Ledger"}


@app.get("/health")
async def health():
    return await get_connection_manager().health_check()
