"""
Migration Models

Data models for migration metadata.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional
from datetime import datetime


@dataclass
class MigrationFile:
    """
    A migration script discovered on disk.

    Only the version/file_name pair is persisted, once the script is applied.
    """
    version: int
    file_name: str
    path: Path

    def read(self) -> str:
        return self.path.read_text(encoding="utf-8")

    def __str__(self) -> str:
        return f"Migration({self.version:012d}, {self.file_name})"

    def __repr__(self) -> str:
        return self.__str__()


@dataclass
class AppliedRecord:
    """One row of the migrations_history ledger."""
    version: int
    filename: Optional[str] = None
    applied_at: Optional[datetime] = None


@dataclass
class MigrationStatusReport:
    """Snapshot of applied and pending migrations for one directory."""
    directory: str
    discovered_count: int
    current_version: Optional[int]
    applied: List[AppliedRecord] = field(default_factory=list)
    pending: List[MigrationFile] = field(default_factory=list)

    @property
    def applied_count(self) -> int:
        return len(self.applied)

    @property
    def pending_count(self) -> int:
        return len(self.pending)
