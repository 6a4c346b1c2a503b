"""Command-line interface for KitchenPress."""

import click

from kitchenpress.__version__ import __version__
from kitchenpress.cli.commands import check_duplicates, health, init_db, serve


@click.group()
@click.version_option(version=__version__, prog_name="kitchenpress")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """KitchenPress - content backend for a restaurant-industry publication.

    Screens incoming news against recently processed articles and drafts
    blog and social content in the house voice.
    """
    ctx.ensure_object(dict)


# Register commands
cli.add_command(serve)
cli.add_command(init_db)
cli.add_command(check_duplicates)
cli.add_command(health)


def main() -> None:
    """Main entry point for CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
