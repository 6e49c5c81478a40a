"""Main CLI application."""

import typer
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()

from .init import init_command
from .run import run_command
from .sources import sources_app

app = typer.Typer(
    name="rssdash",
    help="RSS Dashboard - concurrent feed fetcher and aggregator",
    no_args_is_help=True,
)

# Register commands
app.command("init")(init_command)
app.command("run")(run_command)
app.add_typer(sources_app, name="sources", help="Manage feed sources")


if __name__ == "__main__":
    app()
