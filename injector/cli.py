"""CLI to inject a pre-shared API key into an n8n SQLite database."""

import logging
from pathlib import Path

import click

from injector import bootstrap
from injector.config import get_settings


@click.command()
@click.option(
    "--api-key",
    envvar="N8N_API_KEY",
    default=None,
    help="API key to inject (defaults to N8N_API_KEY)",
)
@click.option(
    "--user-folder",
    envvar="N8N_USER_FOLDER",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="n8n user folder containing database.sqlite",
)
@click.option(
    "--db-path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Explicit database file, overrides the user folder",
)
@click.option("--max-attempts", type=click.IntRange(min=0), default=None)
@click.option("--poll-interval", type=click.FloatRange(min=0), default=None)
@click.option(
    "--settle-delay",
    type=click.FloatRange(min=0),
    default=None,
    help="Seconds to wait after the database file appears",
)
@click.option(
    "--log-level",
    type=click.Choice(
        ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False
    ),
    default=None,
)
@click.pass_context
def main(
    ctx: click.Context,
    api_key: str | None,
    user_folder: Path | None,
    db_path: Path | None,
    max_attempts: int | None,
    poll_interval: float | None,
    settle_delay: float | None,
    log_level: str | None,
) -> None:
    """Wait for the n8n database and inject the API key into it."""
    settings = get_settings()

    # Command line options win over environment and .env values
    if api_key is not None:
        settings.n8n.api_key = api_key
    if user_folder is not None:
        settings.n8n.user_folder = user_folder
    if db_path is not None:
        settings.injector.database_path = db_path
    if max_attempts is not None:
        settings.injector.max_attempts = max_attempts
    if poll_interval is not None:
        settings.injector.poll_interval = poll_interval
    if settle_delay is not None:
        settings.injector.settle_delay = settle_delay
    if log_level is not None:
        settings.app.log_level = log_level
        logging.getLogger().setLevel(log_level.upper())

    ctx.exit(bootstrap.run(settings))


if __name__ == "__main__":
    main()  # pylint: disable=no-value-for-parameter
