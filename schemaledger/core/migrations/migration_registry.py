"""
Migration Registry

Discovers migration files from the migrations directory.
"""
import os
import logging
from pathlib import Path
from typing import List, Dict
from schemaledger.core.migrations.migration_models import MigrationFile
from schemaledger.core.migrations.version_parser import parse_version
from schemaledger.core.migrations.exceptions import (
    DiscoveryError,
    DuplicateVersionInDirectory,
    MigrationError,
)

logger = logging.getLogger("schemaledger.migrations.registry")


class MigrationRegistry:
    """
    Discovers and manages migration files.

    Every regular file in the directory must be named
    <12-digit-version>_<description>.<ext>. Subdirectories and dot-files
    are ignored; anything else with a bad name aborts discovery.
    """

    def __init__(self, migrations_dir: str):
        """
        Initialize migration registry.

        Args:
            migrations_dir: Path to migrations directory
        """
        self.migrations_dir = migrations_dir

    def discover_migrations(self) -> List[MigrationFile]:
        """
        Discover all migration files in the migrations directory.

        Returns:
            List of MigrationFile objects, sorted by version.

        Raises:
            DiscoveryError: If the directory cannot be read.
            InvalidVersionFormat, InvalidVersionValue: On a malformed file name.
            DuplicateVersionInDirectory: If two files share a version.
        """
        try:
            entries = sorted(os.listdir(self.migrations_dir))
        except OSError as e:
            raise DiscoveryError(
                f"failed to read files from dir: {e}",
                directory=self.migrations_dir,
            ) from e

        migrations: Dict[int, MigrationFile] = {}

        for file_name in entries:
            if file_name.startswith("."):
                continue

            filepath = Path(self.migrations_dir) / file_name
            if not filepath.is_file():
                continue

            try:
                version = parse_version(file_name)
            except MigrationError as e:
                raise type(e)(
                    e.message,
                    directory=self.migrations_dir,
                    file_name=file_name,
                ) from e

            if version in migrations:
                raise DuplicateVersionInDirectory(
                    f"version is shared by '{migrations[version].file_name}' and '{file_name}'",
                    directory=self.migrations_dir,
                    file_name=file_name,
                    version=version,
                )

            migrations[version] = MigrationFile(
                version=version,
                file_name=file_name,
                path=filepath,
            )

        result = [migrations[version] for version in sorted(migrations)]

        logger.info(f"Found total of {len(result)} migration files.")
        return result
