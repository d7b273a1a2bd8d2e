"""Pytest configuration and fixtures for testing."""

import base64
import json

import pytest
from sqlalchemy import create_engine, text

from injector import config
from injector.config import Settings

N8N_SCHEMA = (
    """
    CREATE TABLE "user" (
        id TEXT PRIMARY KEY,
        email TEXT,
        firstName TEXT,
        lastName TEXT,
        password TEXT,
        personalizationAnswers TEXT,
        globalRoleId INTEGER
    )
    """,
    """
    CREATE TABLE "api_key" (
        id TEXT PRIMARY KEY,
        label TEXT NOT NULL,
        apiKey TEXT NOT NULL UNIQUE,
        userId TEXT NOT NULL,
        createdAt DATETIME NOT NULL,
        updatedAt DATETIME NOT NULL
    )
    """,
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Run every test without ambient configuration or a stray .env file."""
    for name in (
        "N8N_API_KEY",
        "N8N_USER_FOLDER",
        "INJECTOR_DATABASE_PATH",
        "INJECTOR_MAX_ATTEMPTS",
        "INJECTOR_POLL_INTERVAL",
        "INJECTOR_SETTLE_DELAY",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(config, "_settings", None)

    # Tests never wait on real time
    monkeypatch.setenv("INJECTOR_POLL_INTERVAL", "0")
    monkeypatch.setenv("INJECTOR_SETTLE_DELAY", "0")


def make_token(payload) -> str:
    """Build an unsigned JWT-style token around ``payload``."""

    def encode(data) -> str:
        raw = json.dumps(data).encode("utf-8")
        return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")

    return f"{encode({'alg': 'HS256', 'typ': 'JWT'})}.{encode(payload)}.signature"


@pytest.fixture
def user_folder(tmp_path):
    """n8n user folder that does not yet contain a database."""
    folder = tmp_path / "n8n"
    folder.mkdir()
    return folder


@pytest.fixture
def n8n_db(user_folder):
    """Create an n8n-shaped SQLite database and return an engine for it."""
    path = user_folder / "database.sqlite"
    engine = create_engine(f"sqlite:///{path}")
    with engine.begin() as conn:
        for statement in N8N_SCHEMA:
            conn.execute(text(statement))
    yield engine
    engine.dispose()


@pytest.fixture
def settings(monkeypatch, user_folder):
    """Settings factory pointing at the test user folder."""

    def build(api_key: str | None = None) -> Settings:
        if api_key is not None:
            monkeypatch.setenv("N8N_API_KEY", api_key)
        monkeypatch.setenv("N8N_USER_FOLDER", str(user_folder))
        return Settings()

    return build


def fetch_all(engine, table: str) -> list[dict]:
    """Return every row of ``table`` as a dictionary."""
    with engine.connect() as conn:
        rows = conn.execute(text(f'SELECT * FROM "{table}"')).mappings().all()
    return [dict(row) for row in rows]
