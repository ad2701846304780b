"""CLI command modules for moby."""

from __future__ import annotations

import typer

from . import deploy, dev


def register_commands(app: typer.Typer) -> None:
    """Attach the dev and deploy command groups to ``app``."""
    app.add_typer(dev.app, name="dev")
    app.add_typer(deploy.app, name="deploy")


__all__ = ["register_commands"]
