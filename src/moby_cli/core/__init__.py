"""Core utilities: configuration, shell execution and error types."""

from .config import ConfigResolver, DockerSettings, ProjectConfig, get_resolver, load_env_file
from .exceptions import (
    CommandFailure,
    ConfigNotFound,
    ConfigParseError,
    MissingVersion,
    MobyError,
    NoProjectSelected,
    ProjectNotFound,
)
from .shell import CommandResult, run_command, try_command

__all__ = [
    "CommandFailure",
    "CommandResult",
    "ConfigNotFound",
    "ConfigParseError",
    "ConfigResolver",
    "DockerSettings",
    "MissingVersion",
    "MobyError",
    "NoProjectSelected",
    "ProjectConfig",
    "ProjectNotFound",
    "get_resolver",
    "load_env_file",
    "run_command",
    "try_command",
]
