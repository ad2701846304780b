"""
Moby CLI - Docker project manager.

Usage:
    moby dev start <project>
    moby deploy all <project> --version v1.0.0
    moby version
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

__version__ = "0.2.0"

from moby_cli.cli.commands import register_commands  # noqa: E402
from moby_cli.cli.helpers import configure_logging, console  # noqa: E402
from moby_cli.core.config import ConfigResolver, get_resolver  # noqa: E402

TAGLINE = f"🐳 Moby - Docker Project Manager v{__version__}"

app = typer.Typer(
    name="moby",
    help="Manage Docker development containers and ECR deployments",
    add_completion=False,
    invoke_without_command=True,
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"v{__version__}")
        raise typer.Exit()


@app.callback()
def callback(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        help=(
            "Path to .moby.yaml (default: $MOBY_CONFIG, else the source checkout for "
            "editable installs, else the environment prefix sys.prefix)"
        ),
        dir_okay=False,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
    show_version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Show the tagline when no subcommand is provided."""
    configure_logging(verbose)
    ctx.obj = ConfigResolver(config) if config is not None else get_resolver()
    if ctx.invoked_subcommand is None:
        console.print(TAGLINE)
        console.print("[dim]Run 'moby --help' for usage information[/dim]")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"v{__version__}")


register_commands(app)


def main() -> None:
    app()


__all__ = ["__version__", "app", "main"]
