"""
Schema Ledger

Applies versioned SQL migration files to a database exactly once, in version
order, recording every applied version in the migrations_history ledger.
"""

from schemaledger.services.database.migration_orchestrator import MigrationOrchestrator

__all__ = ["MigrationOrchestrator"]
