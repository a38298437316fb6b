"""
Migration Exceptions

Every failure of a migration run is fatal and surfaces as a subclass of
MigrationError carrying the directory, file name and version it concerns.
"""
from typing import Optional


class MigrationError(Exception):
    """Base exception for migration errors"""

    def __init__(
        self,
        message: str,
        directory: Optional[str] = None,
        file_name: Optional[str] = None,
        version: Optional[int] = None,
    ):
        self.message = message
        self.directory = directory
        self.file_name = file_name
        self.version = version
        super().__init__(self._format())

    def in_directory(self, directory: str) -> "MigrationError":
        """Attach the migrations directory if the error does not carry one yet."""
        if self.directory is None:
            self.directory = directory
            self.args = (self._format(),)
        return self

    def _format(self) -> str:
        context = []
        if self.directory is not None:
            context.append(f"directory='{self.directory}'")
        if self.file_name is not None:
            context.append(f"file='{self.file_name}'")
        if self.version is not None:
            context.append(f"version={self.version}")
        if not context:
            return self.message
        return f"{self.message} ({', '.join(context)})"


class DiscoveryError(MigrationError):
    """Raised when the migrations directory cannot be listed"""
    pass


class InvalidVersionFormat(MigrationError):
    """Raised when a file name has no 12 character version prefix"""
    pass


class InvalidVersionValue(MigrationError):
    """Raised when a version prefix is not a number"""
    pass


class DuplicateVersionInDirectory(MigrationError):
    """Raised when two migration files share the same version"""
    pass


class LedgerBootstrapError(MigrationError):
    """Raised when the migrations_history table cannot be created"""
    pass


class PendingResolutionError(MigrationError):
    """Raised when applied versions cannot be read from the ledger"""
    pass


class FileReadError(MigrationError):
    """Raised when a migration file cannot be read before execution"""
    pass


class ScriptExecutionError(MigrationError):
    """Raised when a migration script fails against the database"""
    pass


class LedgerRecordError(MigrationError):
    """Raised when a ledger row cannot be written"""
    pass


class DuplicateVersion(LedgerRecordError):
    """Raised when the ledger already holds the version being recorded"""
    pass
