"""
Pending Resolver

Computes which discovered versions still have to be applied.
"""
import logging
from typing import List, Sequence
from schemaledger.core.migrations.migration_tracker import MigrationTracker

logger = logging.getLogger("schemaledger.migrations.resolver")


async def resolve_pending(versions: Sequence[int], tracker: MigrationTracker) -> List[int]:
    """
    Get the discovered versions that are not in the ledger.

    Args:
        versions: Discovered versions
        tracker: Ledger to check against

    Returns:
        Pending versions in ascending order
    """
    if not versions:
        return []

    ordered = sorted(set(versions))
    applied = await tracker.applied_versions(ordered)
    pending = [version for version in ordered if version not in applied]

    logger.debug(f"{len(applied)} of {len(ordered)} discovered migrations already applied")
    return pending
