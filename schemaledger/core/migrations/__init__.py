"""
Migration Core

- version_parser: file name -> version
- migration_registry: directory discovery
- migration_tracker: migrations_history ledger
- pending_resolver: discovered minus applied
"""

from schemaledger.core.migrations.migration_models import (
    AppliedRecord,
    MigrationFile,
    MigrationStatusReport,
)
from schemaledger.core.migrations.migration_registry import MigrationRegistry
from schemaledger.core.migrations.migration_tracker import MigrationTracker
from schemaledger.core.migrations.pending_resolver import resolve_pending
from schemaledger.core.migrations.version_parser import parse_version

__all__ = [
    "AppliedRecord",
    "MigrationFile",
    "MigrationStatusReport",
    "MigrationRegistry",
    "MigrationTracker",
    "resolve_pending",
    "parse_version",
]
