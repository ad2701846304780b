"""Local development container lifecycle driven through the docker CLI.

No local state is kept: whether a container exists is always asked of
docker itself.
"""

from __future__ import annotations

import logging

from rich.console import Console

from moby_cli.core.config import ProjectConfig
from moby_cli.core.constants import DEV_TAG, LATEST_TAG, PS_TABLE_FORMAT
from moby_cli.core.exceptions import ContainerExists, MissingPort
from moby_cli.core.git import get_revision
from moby_cli.core.shell import run_command, try_command

__all__ = ["DevService", "list_containers", "prune_containers"]

logger = logging.getLogger(__name__)

console = Console()


class DevService:
    """Build, run and tear down the development container of one project."""

    def __init__(self, project: ProjectConfig, *, out: Console | None = None) -> None:
        self.project = project
        self.console = out or console
        self._revision: str | None = None

    @property
    def container_name(self) -> str:
        return self.project.docker.container_name

    @property
    def image_name(self) -> str:
        return self.project.docker.image_name

    @property
    def revision(self) -> str:
        """Short git hash of the project, or ``dev`` when unavailable."""
        if self._revision is None:
            self._revision = get_revision(self.project.path) or DEV_TAG
        return self._revision

    def image_tags(self) -> list[str]:
        return [
            f"{self.image_name}:{LATEST_TAG}",
            f"{self.image_name}:{DEV_TAG}",
            f"{self.image_name}:{self.revision}",
        ]

    def resolve_port(self, port: int | None = None) -> int:
        if port is not None:
            return port
        default = self.project.docker.default_port
        if default is None:
            raise MissingPort(self.project.name)
        return default

    def container_exists(self) -> bool:
        result = run_command(
            [
                "docker", "ps", "-a",
                "--filter", f"name={self.container_name}",
                "--format", "{{.Names}}",
            ],
            quiet=True,
        )
        return bool(result.stdout.strip())

    def build_image(self) -> None:
        self.console.print("🏗️  Building Docker image...")
        args = ["docker", "build"]
        for tag in self.image_tags():
            args.extend(["-t", tag])
        args.append(".")
        run_command(args, cwd=self.project.require_path())

    def run_container(self, port: int) -> None:
        self.console.print(f"🚀 Starting container on port {port}...")
        run_command(
            [
                "docker", "run", "-d",
                "--name", self.container_name,
                "-p", f"{port}:{port}",
                "-e", f"PORT={port}",
                f"{self.image_name}:{DEV_TAG}",
            ]
        )

    def start(self, port: int | None = None) -> int:
        """Build and run the container; refuse if it already exists."""
        port = self.resolve_port(port)
        self.project.require_path()
        if self.container_exists():
            raise ContainerExists(self.container_name)
        self.build_image()
        self.run_container(port)
        return port

    def stop(self) -> bool:
        """Stop and remove the container, ignoring a missing one.

        Returns True only when both steps succeeded.
        """
        self.console.print("🛑 Stopping container...")
        stopped = try_command(["docker", "stop", self.container_name])
        removed = try_command(["docker", "rm", self.container_name])
        if not (stopped and removed):
            logger.debug("Container %s was not fully present during stop", self.container_name)
        return stopped and removed

    def restart(self, port: int | None = None) -> int:
        port = self.resolve_port(port)
        self.stop()
        self.run_container(port)
        return port

    def rebuild(self, port: int | None = None) -> int:
        port = self.resolve_port(port)
        self.project.require_path()
        self.stop()
        self.build_image()
        self.run_container(port)
        return port

    def logs(self, follow: bool = False) -> None:
        args = ["docker", "logs"]
        if follow:
            args.append("-f")
        args.append(self.container_name)
        run_command(args, stream=follow)

    def clean(self) -> bool:
        """Remove the container and every image tag moby created for it."""
        self.console.print("🧹 Cleaning up Docker resources...")
        self.stop()
        return try_command(["docker", "rmi", *self.image_tags()])


def list_containers(container_name: str | None = None) -> None:
    """Show all containers, optionally only the one named ``container_name``."""
    console.print("📦 Listing Docker containers...\n")
    args = ["docker", "ps", "-a"]
    if container_name:
        args.extend(["--filter", f"name={container_name}"])
    args.extend(["--format", PS_TABLE_FORMAT])
    run_command(args)


def prune_containers() -> None:
    """Remove every stopped container."""
    console.print("🧹 Removing all stopped containers...")
    run_command(["docker", "container", "prune", "-f"])
