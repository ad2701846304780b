"""Build deployment images and push them to ECR."""

from __future__ import annotations

import logging

from rich.console import Console

from moby_cli.core.config import ProjectConfig
from moby_cli.core.constants import LATEST_TAG
from moby_cli.core.exceptions import MissingVersion
from moby_cli.core.git import get_revision
from moby_cli.core.shell import run_command

from . import ecr

__all__ = ["DeployService", "resolve_version"]

logger = logging.getLogger(__name__)

console = Console()


def resolve_version(project: ProjectConfig, explicit: str | None = None) -> str:
    """Explicit version, else the project's git revision."""
    if explicit:
        return str(explicit)
    revision = get_revision(project.require_path())
    if not revision:
        raise MissingVersion()
    return revision


class DeployService:
    """Deployment steps for one project, version and region."""

    def __init__(
        self,
        project: ProjectConfig,
        *,
        version: str,
        region: str,
        out: Console | None = None,
    ) -> None:
        self.project = project
        self.version = version
        self.region = region
        self.console = out or console
        self._account_id: str | None = None

    @property
    def image_name(self) -> str:
        return self.project.docker.image_name

    @property
    def tags(self) -> list[str]:
        return [self.version, LATEST_TAG]

    @property
    def account_id(self) -> str:
        if self._account_id is None:
            self._account_id = ecr.get_account_id()
        return self._account_id

    @property
    def repository_url(self) -> str:
        return ecr.repository_url(self.account_id, self.region, self.image_name)

    def build(self) -> None:
        self.console.print("🏗️  Building deployment image...")
        args = ["docker", "build"]
        for tag in self.tags:
            args.extend(["-t", f"{self.image_name}:{tag}"])
        args.append(".")
        run_command(args, cwd=self.project.require_path())
        self.console.print("[green]✅ Build complete[/green]")

    def login(self) -> str:
        self.console.print("🔑 Logging into ECR...")
        host = ecr.login(self.region, self.account_id)
        self.console.print("[green]✅ Successfully logged into ECR[/green]")
        return host

    def ensure_repository(self) -> None:
        if ecr.ensure_repository(self.image_name, self.region):
            self.console.print(f"📦 Created ECR repository: {self.image_name}")

    def tag_and_push(self) -> list[str]:
        pushed: list[str] = []
        for tag in self.tags:
            local = f"{self.image_name}:{tag}"
            remote = f"{self.repository_url}:{tag}"
            self.console.print(f"🏷️  Tagging: {local} -> {remote}")
            run_command(["docker", "tag", local, remote])
            self.console.print(f"⬆️  Pushing: {remote}")
            run_command(["docker", "push", remote])
            pushed.append(remote)
        return pushed

    def push(self) -> list[str]:
        """Login, make sure the repository exists, then tag and push."""
        self.login()
        self.ensure_repository()
        pushed = self.tag_and_push()
        self.console.print("[green]✅ Push complete[/green]")
        return pushed

    def deploy_all(self) -> str:
        """Build then push; the local image is kept if the push fails."""
        self.build()
        self.push()
        image = f"{self.repository_url}:{self.version}"
        logger.debug("Deployed %s", image)
        return image
