"""API key injection helpers for the n8n SQLite database."""

import logging
import secrets

from sqlalchemy import text
from sqlalchemy.engine import Connection, Engine

from injector.config import InjectorConfig
from injector.models.user import (
    ApiKeyRecord,
    InjectionResult,
    InjectionStatus,
    N8NUser,
)
from injector.services import tokens

logger = logging.getLogger(__name__)

INSERT_USER = text(
    """
    INSERT OR IGNORE INTO "user" (
        id, email, firstName, lastName,
        password, personalizationAnswers, globalRoleId
    ) VALUES (
        :id, :email, :firstName, :lastName,
        :password, :personalizationAnswers, :globalRoleId
    )
    """
)

SELECT_API_KEY = text('SELECT id FROM "api_key" WHERE apiKey = :apiKey')

INSERT_API_KEY = text(
    """
    INSERT INTO "api_key" (
        id, label, apiKey, userId,
        createdAt, updatedAt
    ) VALUES (:id, :label, :apiKey, :userId, datetime('now'), datetime('now'))
    """
)


def generate_api_key_id() -> str:
    """Generate a random ``api_key`` row ID.

    Returns:
        str: ``ak_`` followed by 32 hex characters"""
    return "ak_" + secrets.token_hex(16)


def build_user(user_id: str, config: InjectorConfig) -> N8NUser:
    """Build the placeholder user row for ``user_id``."""
    return N8NUser(
        id=user_id,
        email=config.user_email,
        first_name=config.user_first_name,
        last_name=config.user_last_name,
        password=config.user_password,
        personalization_answers="{}",
        global_role_id=config.user_global_role_id,
    )


def ensure_user(conn: Connection, user: N8NUser) -> None:
    """Insert the user unless a row with the same ID already exists."""
    result = conn.execute(INSERT_USER, user.model_dump(by_alias=True))
    if result.rowcount:
        logger.info("Created user %s", user.id)
    else:
        logger.debug("User %s already exists", user.id)


def find_api_key(conn: Connection, api_key: str) -> str | None:
    """Look up an API key row by its literal value.

    Args:
        conn (Connection): Open database connection
        api_key (str): Literal API key

    Returns:
        str: ID of the existing row or None if none found"""
    return conn.execute(SELECT_API_KEY, {"apiKey": api_key}).scalar_one_or_none()


def insert_api_key(conn: Connection, record: ApiKeyRecord) -> None:
    """Insert an API key row with ``createdAt``/``updatedAt`` set to now."""
    conn.execute(INSERT_API_KEY, record.model_dump(by_alias=True))


def inject_api_key(
    engine: Engine, api_key: str, config: InjectorConfig
) -> InjectionResult:
    """Ensure the owning user exists and store ``api_key`` exactly once.

    The user insert is committed before the API key lookup runs. The
    connection is closed on every path; database errors propagate.

    Args:
        engine: Engine bound to the n8n database.
        api_key: Literal API key to inject.
        config: Injector settings for the placeholder records.

    Returns:
        InjectionResult describing whether a row was inserted.

    Raises:
        sqlalchemy.exc.SQLAlchemyError: On any database failure.
    """
    user_id = tokens.extract_subject(api_key, config.default_user_id)

    with engine.connect() as conn:
        ensure_user(conn, build_user(user_id, config))
        conn.commit()

        existing_id = find_api_key(conn, api_key)
        if existing_id is not None:
            return InjectionResult(
                status=InjectionStatus.ALREADY_PRESENT,
                user_id=user_id,
                api_key_id=str(existing_id),
            )

        record = ApiKeyRecord(
            id=generate_api_key_id(),
            label=config.api_key_label,
            api_key=api_key,
            user_id=user_id,
        )
        insert_api_key(conn, record)
        conn.commit()

    logger.debug("Inserted API key %s for user %s", record.id, user_id)
    return InjectionResult(
        status=InjectionStatus.INSERTED, user_id=user_id, api_key_id=record.id
    )
