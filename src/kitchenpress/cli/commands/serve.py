"""Run the HTTP API."""

from typing import Optional

import click
import uvicorn

from kitchenpress.core.config import Config
from kitchenpress.utils.logging import setup_logging


@click.command()
@click.option("--host", default=None, help="Bind address (default: API_HOST)")
@click.option("--port", type=int, default=None, help="Port (default: API_PORT)")
@click.option("--reload", is_flag=True, help="Reload on code changes (development)")
def serve(host: Optional[str], port: Optional[int], reload: bool) -> None:
    """Start the API server.

    Examples:
        kitchenpress serve
        kitchenpress serve --port 9000 --reload
    """
    try:
        config = Config()  # type: ignore
        config.validate_paths()
    except Exception as e:
        click.echo(f"Error loading configuration: {e}", err=True)
        raise click.Abort()

    setup_logging(config.log_level, config.log_format, config.log_dir)

    uvicorn.run(
        "kitchenpress.api.app:create_app",
        factory=True,
        host=host or config.api_host,
        port=port or config.api_port,
        reload=reload,
        log_config=None,
    )
