"""CLI commands for KitchenPress."""

from kitchenpress.cli.commands.check_duplicates import check_duplicates
from kitchenpress.cli.commands.health import health
from kitchenpress.cli.commands.init_db import init_db
from kitchenpress.cli.commands.serve import serve

__all__ = ["serve", "init_db", "check_duplicates", "health"]
