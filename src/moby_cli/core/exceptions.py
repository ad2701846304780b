"""Exception hierarchy for moby configuration and command orchestration."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class MobyError(RuntimeError):
    """Base exception for all moby errors."""


class ConfigNotFound(MobyError):
    """The moby configuration file does not exist."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Configuration file {path.name} not found at {path}")


class ConfigParseError(MobyError):
    """The configuration file is not valid YAML or has the wrong shape."""

    def __init__(self, path: Path, detail: str):
        self.path = path
        self.detail = detail
        super().__init__(f"Failed to parse {path}: {detail}")


class ProjectNotFound(MobyError):
    """Requested project is not defined in the configuration."""

    def __init__(self, name: str):
        self.name = name
        if name:
            super().__init__(f"Project {name} not found in .moby.yaml")
        else:
            super().__init__("Project name is required")


class ProjectPathNotFound(MobyError):
    """A project's configured path is missing or is not a directory."""

    def __init__(self, name: str, path: Path):
        self.name = name
        self.path = path
        super().__init__(f"Path {path} for project {name} does not exist or is not a directory")


class NoProjectSelected(MobyError):
    """The current project was read before any project was resolved."""

    def __init__(self) -> None:
        super().__init__("No project selected. Resolve a project first.")


class MissingVersion(MobyError):
    """No deploy version was given and the git revision is unavailable."""

    def __init__(self) -> None:
        super().__init__(
            "No version specified and couldn't get git hash. Use --version to specify version."
        )


class MissingPort(MobyError):
    """No port was given and the project has none configured."""

    def __init__(self, project: str):
        self.project = project
        super().__init__(f"No port configured for {project}. Use --port to specify one.")


class ContainerExists(MobyError):
    """The development container is already present."""

    def __init__(self, container_name: str):
        self.container_name = container_name
        super().__init__(
            f"Container {container_name} already exists. Use 'restart' or 'rebuild' instead."
        )


class CommandFailure(MobyError):
    """An external command exited with a non-zero status.

    Captured output is kept on the exception for diagnostics.
    """

    def __init__(
        self,
        command: Sequence[str],
        returncode: int,
        stdout: str = "",
        stderr: str = "",
    ):
        self.command = list(command)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        detail = stderr.strip()
        message = f"Command failed with code {returncode}: {' '.join(self.command)}"
        if detail:
            message = f"{message}\n{detail}"
        super().__init__(message)


__all__ = [
    "CommandFailure",
    "ConfigNotFound",
    "ConfigParseError",
    "ContainerExists",
    "MissingPort",
    "MissingVersion",
    "MobyError",
    "NoProjectSelected",
    "ProjectNotFound",
    "ProjectPathNotFound",
]
