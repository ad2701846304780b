"""Shared console, logging setup and error boundary for moby commands."""

from __future__ import annotations

import logging
import os
from typing import Callable, TypeVar

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from moby_cli.core.config import ConfigResolver, get_resolver
from moby_cli.core.constants import LOG_LEVEL_ENV_VAR
from moby_cli.core.exceptions import MobyError

__all__ = ["configure_logging", "console", "err_console", "resolver_from", "run_or_exit"]

T = TypeVar("T")

console = Console()
err_console = Console(stderr=True)


def configure_logging(verbose: bool = False) -> None:
    """Route log records to stderr through rich."""
    level_name = "DEBUG" if verbose else os.environ.get(LOG_LEVEL_ENV_VAR, "WARNING")
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        level = logging.WARNING

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if isinstance(handler, RichHandler):
            root_logger.removeHandler(handler)

    handler = RichHandler(
        console=err_console,
        show_path=False,
        show_time=False,
        markup=False,
        rich_tracebacks=verbose,
    )
    root_logger.addHandler(handler)
    root_logger.setLevel(level)


def resolver_from(ctx: typer.Context | None) -> ConfigResolver:
    """Resolver placed on the context by the root app, else the process default."""
    obj = ctx.find_root().obj if ctx is not None else None
    if isinstance(obj, ConfigResolver):
        return obj
    return get_resolver()


def run_or_exit(fn: Callable[[], T]) -> T:
    """Run a command body, turning moby errors into exit code 1."""
    try:
        return fn()
    except MobyError as exc:
        err_console.print("[red]❌ Error:[/red]", escape(str(exc)), highlight=False)
        raise typer.Exit(1) from exc
