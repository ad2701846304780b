"""``moby deploy`` commands for building and pushing images to ECR."""

from __future__ import annotations

from typing import Optional

import typer

from moby_cli.cli.helpers import console, resolver_from, run_or_exit
from moby_cli.deploy import ecr
from moby_cli.deploy.service import DeployService, resolve_version

EXAMPLES = """
Examples:

  moby deploy all variant-be --version v1.0.0

  moby deploy build variant-be

  moby deploy push variant-be --version v1.0.0
"""

app = typer.Typer(
    help="Deploy to ECR",
    epilog=EXAMPLES,
    no_args_is_help=True,
)

ProjectArg = typer.Argument(..., help="Project name from .moby.yaml", show_default=False)
VersionOption = typer.Option(None, "--version", help="Version tag (defaults to git hash)")
IgnoredVersionOption = typer.Option(None, "--version", help="Ignored by this command", hidden=True)
RegionOption = typer.Option(None, "--region", "-r", help="AWS region (defaults to AWS CLI config)")


def _service(
    ctx: typer.Context,
    project: str,
    version: Optional[str],
    region: Optional[str],
    *,
    needs_version: bool = True,
) -> DeployService:
    def _build() -> DeployService:
        config = resolver_from(ctx).resolve(project)
        resolved_version = resolve_version(config, version) if needs_version else (version or "")
        if needs_version:
            console.print(f"🚀 Deploying version: {resolved_version}")
        return DeployService(
            config,
            version=resolved_version,
            region=ecr.get_aws_region(region),
        )

    return run_or_exit(_build)


@app.command("build")
def build_command(
    ctx: typer.Context,
    project: str = ProjectArg,
    version: Optional[str] = VersionOption,
    region: Optional[str] = RegionOption,
) -> None:
    """Build image for deployment."""
    service = _service(ctx, project, version, region)
    run_or_exit(service.build)


@app.command("login")
def login_command(
    ctx: typer.Context,
    project: str = ProjectArg,
    version: Optional[str] = IgnoredVersionOption,
    region: Optional[str] = RegionOption,
) -> None:
    """Login to ECR."""
    service = _service(ctx, project, None, region, needs_version=False)
    run_or_exit(service.login)


@app.command("push")
def push_command(
    ctx: typer.Context,
    project: str = ProjectArg,
    version: Optional[str] = VersionOption,
    region: Optional[str] = RegionOption,
) -> None:
    """Push image to ECR."""
    service = _service(ctx, project, version, region)
    run_or_exit(service.push)


@app.command("all")
def all_command(
    ctx: typer.Context,
    project: str = ProjectArg,
    version: Optional[str] = VersionOption,
    region: Optional[str] = RegionOption,
) -> None:
    """Build and push to ECR (recommended)."""
    service = _service(ctx, project, version, region)
    image = run_or_exit(service.deploy_all)
    console.print("\n[bold green]✨ Deployment complete![/bold green]")
    console.print(f"📦 Image: {image}")
