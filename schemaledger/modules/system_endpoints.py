from datetime import datetime
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from schemaledger.core.migrations.exceptions import MigrationError
from schemaledger.modules.database import get_connection_manager
from schemaledger.services.database.migration_orchestrator import MigrationOrchestrator
import logging

logger = logging.getLogger("schemaledger.system")

router = APIRouter(prefix="/api/system", tags=["System"])


class MigrateResponse(BaseModel):
    status: str
    applied: int
    message: str


class AppliedMigration(BaseModel):
    version: int
    filename: Optional[str] = None
    applied_at: Optional[datetime] = None


class PendingMigration(BaseModel):
    version: int
    file_name: str


class MigrationStatusResponse(BaseModel):
    directory: str
    discovered_count: int
    applied_count: int
    pending_count: int
    current_version: Optional[int] = None
    applied: List[AppliedMigration]
    pending: List[PendingMigration]


def get_orchestrator() -> MigrationOrchestrator:
    return MigrationOrchestrator(get_connection_manager().database)


@router.post("/migrate", response_model=MigrateResponse)
async def trigger_migrations(orchestrator: MigrationOrchestrator = Depends(get_orchestrator)):
    """
    Manually checks and runs pending database migrations.
    Useful for production hooks (Cloud Run jobs).
    """
    try:
        applied = await orchestrator.migrate()
    except MigrationError as e:
        logger.error(f"Migration request failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    if applied:
        message = f"{applied} migrations have been applied."
    else:
        message = "Migrations are already up to date."
    return MigrateResponse(status="success", applied=applied, message=message)


@router.get("/migrations", response_model=MigrationStatusResponse)
async def migration_status(orchestrator: MigrationOrchestrator = Depends(get_orchestrator)):
    """
    Lists applied and pending migrations without applying anything.
    """
    try:
        report = await orchestrator.status()
    except MigrationError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return MigrationStatusResponse(
        directory=report.directory,
        discovered_count=report.discovered_count,
        applied_count=report.applied_count,
        pending_count=report.pending_count,
        current_version=report.current_version,
        applied=[
            AppliedMigration(version=r.version, filename=r.filename, applied_at=r.applied_at)
            for r in report.applied
        ],
        pending=[PendingMigration(version=m.version, file_name=m.file_name) for m in report.pending],
    )
