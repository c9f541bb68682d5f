"""
flowgen CLI - Main application entry point.

This module sets up the Typer CLI application with all subcommands.
"""

import typer
from rich.console import Console

from flowgen import __version__
from flowgen.cli import generate
from flowgen.core.config.env import load_layered_env

app = typer.Typer(
    name="flowgen",
    help="Generate and sync trigger flows for Integration App workspaces",
    no_args_is_help=True,
    add_completion=True,
    context_settings={"help_option_names": ["--help", "-h"]},
)

console = Console()


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"flowgen version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show flowgen version and exit",
    ),
) -> None:
    """
    flowgen - trigger flow generator.

    Reads workspace credentials from the environment (or .env files):
        INTEGRATION_APP_WORKSPACE_KEY
        INTEGRATION_APP_WORKSPACE_SECRET

    Common Workflows:
        flowgen generate             # Generate and create all flows
        flowgen generate --dry-run   # Only write flow files
        flowgen render hubspot contacts
    """
    # Precedence: OS env > project .env > user .env
    load_layered_env()


app.command(name="generate")(generate.generate)
app.command(name="render")(generate.render)


def cli_main() -> None:
    """Main CLI entry point."""
    app()


__all__ = ["app", "cli_main"]
