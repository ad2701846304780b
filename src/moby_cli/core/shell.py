"""Run external docker/git/aws commands and relay their output."""

from __future__ import annotations

import logging
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from .exceptions import CommandFailure

__all__ = ["CommandResult", "run_command", "try_command"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Captured outcome of a single external command."""

    args: tuple[str, ...]
    stdout: str
    stderr: str
    returncode: int

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def _echo(result: CommandResult) -> None:
    if result.stdout:
        sys.stdout.write(result.stdout)
        if not result.stdout.endswith("\n"):
            sys.stdout.write("\n")
        sys.stdout.flush()
    if result.stderr:
        sys.stderr.write(result.stderr)
        if not result.stderr.endswith("\n"):
            sys.stderr.write("\n")
        sys.stderr.flush()


def run_command(
    args: Sequence[str],
    *,
    cwd: Path | str | None = None,
    quiet: bool = False,
    input_text: str | None = None,
    stream: bool = False,
) -> CommandResult:
    """Run ``args`` and return its captured output.

    Args:
        args: Executable followed by its arguments
        cwd: Working directory (defaults to the caller's directory)
        quiet: Do not echo captured stdout/stderr to the terminal
        input_text: Text written to the child's stdin before it is closed
        stream: Let the child write straight to the terminal instead of
            capturing (used for ``docker logs -f``)

    Returns:
        CommandResult with the captured streams

    Raises:
        CommandFailure: If the command exits non-zero or cannot be started
    """
    argv = tuple(str(arg) for arg in args)
    if not argv:
        raise ValueError("run_command requires at least an executable name")

    logger.debug("Running: %s (cwd=%s)", " ".join(argv), cwd or ".")
    if cwd is not None and not Path(cwd).is_dir():
        reason = "is not a directory" if Path(cwd).exists() else "does not exist"
        raise CommandFailure(argv, 126, "", f"Working directory {cwd} {reason}")
    try:
        if stream:
            completed = subprocess.run(
                list(argv),
                cwd=str(cwd) if cwd is not None else None,
                input=input_text,
                text=True,
                check=False,
            )
        else:
            completed = subprocess.run(
                list(argv),
                cwd=str(cwd) if cwd is not None else None,
                input=input_text,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
    except FileNotFoundError as exc:
        if exc.filename not in (None, argv[0]):
            raise CommandFailure(argv, 127, "", f"{exc.filename}: {exc.strerror or exc}") from exc
        logger.debug("Executable not found: %s", argv[0])
        raise CommandFailure(argv, 127, "", f"{argv[0]} executable not found on PATH") from exc
    except OSError as exc:
        raise CommandFailure(
            argv, 126, "", f"{exc.filename or argv[0]}: {exc.strerror or exc}"
        ) from exc

    result = CommandResult(
        args=argv,
        stdout="" if stream else (completed.stdout or ""),
        stderr="" if stream else (completed.stderr or ""),
        returncode=completed.returncode,
    )

    if not quiet and not stream:
        _echo(result)

    if not result.ok:
        logger.debug("Command exited with %s: %s", result.returncode, " ".join(argv))
        raise CommandFailure(argv, result.returncode, result.stdout, result.stderr)

    return result


def try_command(args: Sequence[str], **options) -> bool:
    """Best-effort variant of :func:`run_command`.

    Returns False instead of raising when the command fails, for teardown
    steps where a missing target already means the desired state.
    """
    try:
        run_command(args, **options)
    except CommandFailure as exc:
        logger.debug("Ignoring failure of %s (code %s)", " ".join(exc.command), exc.returncode)
        return False
    return True
