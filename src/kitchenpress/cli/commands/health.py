"""Health check command for system diagnostics."""

import sqlite3
import sys

import click

from kitchenpress.core.config import Config
from kitchenpress.database.connection import DatabaseConnection
from kitchenpress.integrations.cost_tracking import daily_cost
from kitchenpress.utils.logging import get_logger

logger = get_logger(__name__)

EXPECTED_TABLES = [
    "api_calls",
    "brand_guidelines",
    "competitor_blacklist",
    "generated_content",
    "industry_trends",
    "knowledge_entities",
    "processed_articles",
]


@click.command()
@click.option("--verbose", "-v", is_flag=True, help="Show detailed health information")
def health(verbose: bool) -> None:
    """Check configuration, database and API usage."""
    click.echo("KitchenPress Health Check")
    click.echo("=" * 50)

    healthy = True

    try:
        config = Config()  # type: ignore
    except Exception as e:
        click.echo(f"  ✗ Configuration error: {e}", err=True)
        sys.exit(1)

    click.echo("Checking configuration...")
    if config.google_api_key:
        click.echo("  ✓ Gemini API key configured")
    if config.openai_api_key:
        click.echo("  ✓ OpenAI API key configured")
    if not (config.google_api_key or config.openai_api_key):
        click.echo("  ✗ No AI provider configured; duplicate checks will match URLs only", err=True)
        healthy = False

    click.echo("Checking database...")
    if not config.db_path.exists():
        click.echo(f"  ✗ Database file not found: {config.db_path} (run 'kitchenpress init-db')", err=True)
        sys.exit(1)

    db = DatabaseConnection(config.db_path)
    try:
        tables = {
            row[0]
            for row in db.execute("SELECT name FROM sqlite_master WHERE type='table'").fetchall()
        }
        missing = [t for t in EXPECTED_TABLES if t not in tables]
        if missing:
            click.echo(f"  ⚠ Missing tables: {', '.join(missing)}", err=True)
            healthy = False
        else:
            click.echo(f"  ✓ All required tables present ({len(EXPECTED_TABLES)} tables)")

        if verbose and not missing:
            for table in ("processed_articles", "generated_content", "knowledge_entities"):
                count = db.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]
                click.echo(f"    - {table}: {count:,}")

        if "api_calls" in tables:
            click.echo(f"  API cost today: ${daily_cost(db):.4f}")

    except sqlite3.Error as e:
        click.echo(f"  ✗ Database error: {e}", err=True)
        logger.error("health_check_failed", error=str(e))
        healthy = False
    finally:
        db.close()

    click.echo("=" * 50)
    if healthy:
        click.echo("Overall Status: HEALTHY")
        sys.exit(0)
    click.echo("Overall Status: UNHEALTHY")
    sys.exit(1)
