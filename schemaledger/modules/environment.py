"""
Environment settings for the migration service.
"""
import os
from typing import Optional
from dotenv import load_dotenv

load_dotenv()

DEFAULT_MIGRATIONS_DIR = "migrations"


def get_database_url() -> Optional[str]:
    return os.getenv("DATABASE_URL")


def get_migrations_dir() -> str:
    """Absolute path of the configured migrations directory."""
    return resolve_path(os.getenv("MIGRATIONS_DIR", DEFAULT_MIGRATIONS_DIR))


def resolve_path(path: str) -> str:
    """
    Resolve a path against APP_ROOT (or the working directory).

    Absolute paths are returned unchanged.
    """
    if os.path.isabs(path):
        return path
    root = os.getenv("APP_ROOT") or os.getcwd()
    return os.path.join(root, path)


def migrate_on_startup() -> bool:
    return os.getenv("RUN_MIGRATIONS_ON_STARTUP", "false").strip().lower() in ("1", "true", "yes")
