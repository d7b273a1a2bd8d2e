"""Linear bootstrap procedure mapping each outcome to a process exit status."""

import logging
import time
from collections.abc import Callable

from sqlalchemy.exc import SQLAlchemyError

from injector.config import Settings
from injector.models.user import InjectionStatus
from injector.services import api_keys, database

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


def run(settings: Settings, sleep: Callable[[float], None] = time.sleep) -> int:
    """Wait for the n8n database and inject the configured API key.

    Args:
        settings: Loaded settings.
        sleep: Sleep function used while polling, replaceable in tests.

    Returns:
        0 on success or when no API key is configured, 1 on failure.
    """
    api_key = settings.n8n.api_key
    if not api_key:
        logger.info("N8N_API_KEY not provided - skipping API key injection")
        return EXIT_OK

    db_path = database.resolve_database_path(
        settings.n8n.user_folder, settings.injector.database_path
    )

    logger.debug("Resolved database path %s", db_path)
    logger.info("Waiting for N8N database initialization...")
    try:
        database.wait_for_database(
            db_path,
            max_attempts=settings.injector.max_attempts,
            poll_interval=settings.injector.poll_interval,
            settle_delay=settings.injector.settle_delay,
            sleep=sleep,
        )
    except database.DatabaseNotFoundError as e:
        logger.error("%s", e)
        return EXIT_FAILURE

    logger.info("Database found - injecting API key...")
    engine = database.get_engine(db_path)
    try:
        result = api_keys.inject_api_key(engine, api_key, settings.injector)
    except SQLAlchemyError as e:
        logger.error("Error injecting API key: %s", e, exc_info=True)
        return EXIT_FAILURE
    finally:
        engine.dispose()

    if result.status is InjectionStatus.ALREADY_PRESENT:
        logger.info("API key already exists - skipping injection")
    else:
        logger.debug("Injected API key owned by user %s", result.user_id)
        logger.info("API key successfully injected")
    return EXIT_OK
