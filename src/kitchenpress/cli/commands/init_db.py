"""Database initialization command."""

import click

from kitchenpress.core.config import Config
from kitchenpress.database.connection import init_database
from kitchenpress.utils.logging import setup_logging


@click.command("init-db")
@click.option(
    "--seed",
    is_flag=True,
    help="Load the restaurant-industry knowledge base and brand guidelines",
)
def init_db(seed: bool) -> None:
    """Create the database schema, optionally with seed data.

    Safe to re-run: existing tables and seeded rows are left alone.
    """
    try:
        config = Config()  # type: ignore
        config.validate_paths()
    except Exception as e:
        click.echo(f"Error loading configuration: {e}", err=True)
        raise click.Abort()

    setup_logging(config.log_level, config.log_format, config.log_dir)

    db = init_database(config.db_path, seed=seed)
    try:
        tables = [
            row[0]
            for row in db.execute(
                "SELECT name FROM sqlite_master WHERE type='table' ORDER BY name"
            ).fetchall()
        ]
    finally:
        db.close()

    click.echo(f"Database ready: {config.db_path}")
    click.echo(f"Tables: {', '.join(tables)}")
