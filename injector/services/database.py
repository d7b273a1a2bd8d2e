"""SQLite database service for the n8n instance being bootstrapped.

Provides functions for locating the database file, waiting for n8n to create
it and opening a SQLAlchemy engine against it.
"""

import logging
import time
from collections.abc import Callable
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_PATH = Path("/tmp/.n8n/database.sqlite")
DATABASE_FILENAME = "database.sqlite"


class DatabaseNotFoundError(TimeoutError):
    """Raised when the database file does not appear in time."""


def resolve_database_path(
    user_folder: Path | None, override: Path | None = None
) -> Path:
    """Resolve the location of the n8n database file.

    Args:
        user_folder: n8n user folder, if configured.
        override: Explicit database path taking precedence over everything.

    Returns:
        Path to ``database.sqlite``.
    """
    if override is not None:
        return Path(override)
    if user_folder:
        return Path(user_folder) / DATABASE_FILENAME
    return DEFAULT_DATABASE_PATH


def wait_for_database(
    path: Path,
    max_attempts: int = 30,
    poll_interval: float = 1.0,
    settle_delay: float = 2.0,
    sleep: Callable[[float], None] = time.sleep,
) -> Path:
    """Block until the database file exists.

    The file is checked once per ``poll_interval`` for attempts
    ``0..max_attempts``. Once found, ``settle_delay`` more seconds pass so n8n
    can finish creating its schema.

    Args:
        path: Database file to wait for.
        max_attempts: Retries after the first check.
        poll_interval: Seconds between checks.
        settle_delay: Seconds to wait once the file exists.
        sleep: Sleep function, replaceable in tests.

    Returns:
        The path that was found.

    Raises:
        DatabaseNotFoundError: If the file is still missing after the last attempt.
    """
    for attempt in range(max_attempts + 1):
        if path.exists():
            logger.debug("Database file found after %d attempt(s)", attempt + 1)
            sleep(settle_delay)
            return path
        if attempt < max_attempts:
            sleep(poll_interval)

    raise DatabaseNotFoundError(
        f"Database not created after {max_attempts * poll_interval:g} seconds"
    )


def get_engine(path: Path) -> Engine:
    """Create a SQLAlchemy engine for the SQLite file at ``path``.

    No connection is opened until the engine is first used.

    Args:
        path: Database file.

    Returns:
        Engine instance.
    """
    logger.debug("Creating engine for %s", path)
    return create_engine(f"sqlite:///{path}")
