"""Source-control revision lookup used for image tags."""

from __future__ import annotations

import logging
from pathlib import Path

from .exceptions import CommandFailure
from .shell import run_command

__all__ = ["get_revision"]

logger = logging.getLogger(__name__)


def get_revision(project_path: Path | str) -> str | None:
    """Return the short commit hash of ``project_path`` or None.

    None means the directory is not a git repository, has no commits,
    or git is not installed.
    """
    try:
        result = run_command(
            ["git", "rev-parse", "--short", "HEAD"],
            cwd=project_path,
            quiet=True,
        )
    except CommandFailure as exc:
        logger.debug("git revision unavailable for %s: %s", project_path, exc.stderr.strip())
        return None
    return result.stdout.strip() or None
