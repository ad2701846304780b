"""``moby dev`` commands for local development containers."""

from __future__ import annotations

from typing import Optional

import typer

from moby_cli.cli.helpers import console, err_console, resolver_from, run_or_exit
from moby_cli.dev.service import DevService, list_containers, prune_containers

EXAMPLES = """
Examples:

  moby dev start variant-be

  moby dev logs variant-be --follow

  moby dev rebuild variant-be --port 3000

  moby dev ps

  moby dev prune
"""

app = typer.Typer(
    help="Manage development environment",
    epilog=EXAMPLES,
    no_args_is_help=True,
)

ProjectArg = typer.Argument(None, help="Project name from .moby.yaml", show_default=False)
PortOption = typer.Option(None, "--port", "-p", help="Port to publish (default: first port in .moby.yaml)")
IgnoredPortOption = typer.Option(None, "--port", "-p", help="Ignored by this command", hidden=True)


def _service(ctx: typer.Context, project: Optional[str]) -> DevService:
    if not project:
        err_console.print("[red]Error:[/red] Project name is required for this command")
        raise typer.Exit(1)
    config = run_or_exit(lambda: resolver_from(ctx).resolve(project))
    return DevService(config)


@app.command("start")
def start_command(
    ctx: typer.Context,
    project: Optional[str] = ProjectArg,
    port: Optional[int] = PortOption,
) -> None:
    """Build and start the development container."""
    service = _service(ctx, project)
    used_port = run_or_exit(lambda: service.start(port))
    console.print(f"[green]✅ Container started! Available at http://localhost:{used_port}[/green]")


@app.command("stop")
def stop_command(
    ctx: typer.Context,
    project: Optional[str] = ProjectArg,
    port: Optional[int] = IgnoredPortOption,
) -> None:
    """Stop and remove the development container."""
    service = _service(ctx, project)
    run_or_exit(service.stop)
    console.print("[green]✅ Container stopped and removed.[/green]")


@app.command("restart")
def restart_command(
    ctx: typer.Context,
    project: Optional[str] = ProjectArg,
    port: Optional[int] = PortOption,
) -> None:
    """Restart the development container without rebuilding."""
    service = _service(ctx, project)
    used_port = run_or_exit(lambda: service.restart(port))
    console.print(f"[green]✅ Container restarted! Available at http://localhost:{used_port}[/green]")


@app.command("rebuild")
def rebuild_command(
    ctx: typer.Context,
    project: Optional[str] = ProjectArg,
    port: Optional[int] = PortOption,
) -> None:
    """Rebuild the image and restart the container."""
    service = _service(ctx, project)
    used_port = run_or_exit(lambda: service.rebuild(port))
    console.print(
        f"[green]✅ Container rebuilt and started! Available at http://localhost:{used_port}[/green]"
    )


@app.command("logs")
def logs_command(
    ctx: typer.Context,
    project: Optional[str] = ProjectArg,
    follow: bool = typer.Option(False, "--follow", "-f", help="Follow log output"),
    port: Optional[int] = IgnoredPortOption,
) -> None:
    """Show container logs."""
    service = _service(ctx, project)
    run_or_exit(lambda: service.logs(follow=follow))


@app.command("clean")
def clean_command(
    ctx: typer.Context,
    project: Optional[str] = ProjectArg,
    port: Optional[int] = IgnoredPortOption,
) -> None:
    """Remove the development container and its images."""
    service = _service(ctx, project)
    run_or_exit(service.clean)
    console.print("[green]✅ Cleanup complete![/green]")


@app.command("ps")
def ps_command(
    ctx: typer.Context,
    project: Optional[str] = ProjectArg,
    port: Optional[int] = IgnoredPortOption,
) -> None:
    """List Docker containers, optionally only the project's container."""

    def _run() -> None:
        container_name = None
        if project:
            container_name = resolver_from(ctx).resolve(project).docker.container_name
        list_containers(container_name)

    run_or_exit(_run)


@app.command("prune")
def prune_command(port: Optional[int] = IgnoredPortOption) -> None:
    """Remove all stopped containers."""
    run_or_exit(prune_containers)
    console.print("[green]✅ All stopped containers removed![/green]")
