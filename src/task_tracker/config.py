"""
Runtime configuration read from the environment.

All settings are plain environment variables so the MCP server, the CLI and
the test suite can point the same code at different databases and callers.
"""

import logging
import os
from pathlib import Path
from typing import Optional

DATABASE_URL_ENV = "TASKTRACK_DATABASE_URL"
DB_PATH_ENV = "TASKTRACK_DB_PATH"
USER_ID_ENV = "TASKTRACK_USER_ID"
DEBUG_ENV = "TASKTRACK_DEBUG"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

DEFAULT_DATA_DIR = ".tasktrack"
DEFAULT_DB_FILENAME = "database.db"

# Connection pool settings for server databases (ignored for SQLite)
POOL_SIZE = 10
POOL_TIMEOUT_SECONDS = 5
POOL_RECYCLE_SECONDS = 30


def get_default_db_path() -> str:
    """Get the default SQLite database path.

    Checks TASKTRACK_DB_PATH first, then falls back to
    ~/.tasktrack/database.db, creating the directory if needed.
    """
    env_db_path = os.environ.get(DB_PATH_ENV)
    if env_db_path:
        db_path = Path(env_db_path)
        db_path.parent.mkdir(parents=True, exist_ok=True)
        return str(db_path)

    data_dir = Path.home() / DEFAULT_DATA_DIR
    data_dir.mkdir(parents=True, exist_ok=True)
    return str(data_dir / DEFAULT_DB_FILENAME)


def get_database_url() -> Optional[str]:
    """Get an explicit SQLAlchemy database URL, if one is configured."""
    return os.environ.get(DATABASE_URL_ENV) or None


def get_caller_id() -> Optional[str]:
    """Get the caller identity configured for this process."""
    value = os.environ.get(USER_ID_ENV, "").strip()
    return value or None


def is_debug_mode() -> bool:
    """Check if debug mode is enabled."""
    return os.environ.get(DEBUG_ENV, "").lower() in ("1", "true", "yes")


def configure_logging(default_level: int = logging.INFO) -> None:
    """Configure process-wide logging; TASKTRACK_DEBUG forces DEBUG."""
    logging.basicConfig(
        level=logging.DEBUG if is_debug_mode() else default_level,
        format=LOG_FORMAT,
    )
