"""Project configuration stored in .moby.yaml.

The configuration lives next to the moby installation and maps project
names to a source path and Docker settings::

    projects:
      api:
        path: /srv/api
        docker:
          ports: [8080]
          image_name: api-svc
          container_name: api-dev
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .constants import CONFIG_ENV_VAR, CONFIG_FILENAME, ECR_ENV_FILENAME
from .exceptions import (
    ConfigNotFound,
    ConfigParseError,
    NoProjectSelected,
    ProjectNotFound,
    ProjectPathNotFound,
)

__all__ = [
    "ConfigResolver",
    "DockerSettings",
    "MobyConfig",
    "ProjectConfig",
    "default_config_path",
    "get_resolver",
    "load_env_file",
    "load_moby_config",
]

logger = logging.getLogger(__name__)


def _install_root() -> Path:
    """Source checkout for editable installs, else the environment prefix."""
    checkout = Path(__file__).resolve().parents[3]
    if (checkout / "pyproject.toml").is_file():
        return checkout
    return Path(sys.prefix)


INSTALL_ROOT = _install_root()


@dataclass(frozen=True, slots=True)
class DockerSettings:
    """Docker settings for one project."""

    container_name: str
    image_name: str
    ports: tuple[int, ...] = ()
    health_check: str | None = None

    @property
    def default_port(self) -> int | None:
        return self.ports[0] if self.ports else None

    @classmethod
    def from_dict(cls, project_name: str, data: Any) -> "DockerSettings":
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"projects.{project_name}.docker must be a mapping")

        raw_ports = data.get("ports") or []
        if isinstance(raw_ports, (int, str)):
            raw_ports = [raw_ports]
        if not isinstance(raw_ports, list):
            raise ValueError(f"projects.{project_name}.docker.ports must be a list of integers")
        try:
            ports = tuple(int(port) for port in raw_ports)
        except (TypeError, ValueError) as exc:
            raise ValueError(
                f"projects.{project_name}.docker.ports must be a list of integers"
            ) from exc

        container_name = data.get("container_name")
        image_name = data.get("image_name")
        health_check = data.get("health_check")
        return cls(
            container_name=str(container_name).strip() if container_name else project_name,
            image_name=str(image_name).strip() if image_name else project_name,
            ports=ports,
            health_check=str(health_check) if health_check else None,
        )


@dataclass(frozen=True, slots=True)
class ProjectConfig:
    """A single project entry from .moby.yaml."""

    name: str
    path: Path
    docker: DockerSettings

    @classmethod
    def from_dict(cls, name: str, data: Any, base_dir: Path) -> "ProjectConfig":
        if not isinstance(data, dict):
            raise ValueError(f"projects.{name} must be a mapping")
        raw_path = data.get("path")
        if not isinstance(raw_path, str) or not raw_path.strip():
            raise ValueError(f"projects.{name}.path is required")
        path = Path(raw_path.strip()).expanduser()
        if not path.is_absolute():
            path = base_dir / path
        return cls(
            name=name,
            path=path,
            docker=DockerSettings.from_dict(name, data.get("docker")),
        )

    def require_path(self) -> Path:
        """Return the project directory, raising if it is not a directory."""
        if not self.path.is_dir():
            raise ProjectPathNotFound(self.name, self.path)
        return self.path


@dataclass(frozen=True, slots=True)
class MobyConfig:
    """Parsed .moby.yaml: project name to project configuration."""

    source: Path
    projects: dict[str, ProjectConfig] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any, source: Path) -> "MobyConfig":
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError("top level must be a mapping with a 'projects' key")
        raw_projects = data.get("projects") or {}
        if not isinstance(raw_projects, dict):
            raise ValueError("'projects' must be a mapping of project names")
        projects = {
            str(name): ProjectConfig.from_dict(str(name), entry, source.parent)
            for name, entry in raw_projects.items()
        }
        return cls(source=source, projects=projects)


def default_config_path() -> Path:
    """Location of .moby.yaml: $MOBY_CONFIG, else under INSTALL_ROOT."""
    override = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if override:
        return Path(override).expanduser()
    return INSTALL_ROOT / CONFIG_FILENAME


def load_moby_config(config_path: Path) -> MobyConfig:
    """Read and validate the configuration file."""
    yaml = YAML(typ="safe")
    try:
        with config_path.open("r", encoding="utf-8") as handle:
            payload = yaml.load(handle)
    except FileNotFoundError as exc:
        raise ConfigNotFound(config_path) from exc
    except YAMLError as exc:
        raise ConfigParseError(config_path, str(exc)) from exc

    try:
        config = MobyConfig.from_dict(payload, config_path)
    except ValueError as exc:
        raise ConfigParseError(config_path, str(exc)) from exc

    logger.debug("Loaded %d project(s) from %s", len(config.projects), config_path)
    return config


def load_env_file(path: Path) -> dict[str, str]:
    """Parse a KEY=VALUE env file.

    Blank lines and ``#`` comments are skipped. A missing file yields an
    empty mapping.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.warning("No %s found in %s", path.name, path.parent)
        return {}

    values: dict[str, str] = {}
    for line in content.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip()
        if key and value:
            values[key] = value
    return values


class ConfigResolver:
    """Lazily loads .moby.yaml and resolves project names.

    The most recent successful :meth:`resolve` is remembered as the
    current project.
    """

    def __init__(self, config_path: Path | None = None) -> None:
        self._config_path = config_path
        self._config: MobyConfig | None = None
        self._current: ProjectConfig | None = None

    @property
    def config_path(self) -> Path:
        return self._config_path or default_config_path()

    @property
    def config(self) -> MobyConfig:
        if self._config is None:
            self._config = load_moby_config(self.config_path)
        return self._config

    def project_names(self) -> list[str]:
        return sorted(self.config.projects)

    def resolve(self, project_name: str) -> ProjectConfig:
        """Look up ``project_name`` and make it the current project."""
        projects = self.config.projects
        if not project_name or project_name not in projects:
            raise ProjectNotFound(project_name or "")
        project = projects[project_name]
        self._current = project
        logger.debug("Resolved project %s at %s", project.name, project.path)
        return project

    def current_project(self) -> ProjectConfig:
        if self._current is None:
            raise NoProjectSelected()
        return self._current

    def current_project_path(self) -> Path:
        return self.current_project().path

    def load_ecr_env(self) -> dict[str, str]:
        """Read .env.ecr from the current project directory."""
        return load_env_file(self.current_project_path() / ECR_ENV_FILENAME)


@lru_cache(maxsize=None)
def get_resolver(config_path: Path | None = None) -> ConfigResolver:
    """Process-wide resolver so the configuration is read at most once."""
    return ConfigResolver(config_path)
