"""Bootstrap injector that seeds an n8n SQLite database with a pre-shared API key."""

__version__ = "0.1.0"
