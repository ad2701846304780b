from __future__ import annotations

import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest

from moby_cli.core.config import ConfigResolver

CONFIG_TEMPLATE = """\
projects:
  api:
    path: {api_path}
    docker:
      ports: [8080, 9090]
      image_name: api-svc
      container_name: api-dev
  web:
    path: {web_path}
    docker:
      ports: [3000]
  worker:
    path: {worker_path}
"""


@dataclass
class RecordedCall:
    args: list[str]
    kwargs: dict[str, Any]


@dataclass
class FakeSubprocess:
    """Stand-in for ``subprocess.run`` that records calls and replays scripted results."""

    calls: list[RecordedCall] = field(default_factory=list)
    _responses: list[tuple[tuple[str, ...], int, str, str, OSError | None]] = field(
        default_factory=list
    )

    def on(
        self,
        *prefix: str,
        returncode: int = 0,
        stdout: str = "",
        stderr: str = "",
        missing: bool = False,
        raises: OSError | None = None,
    ) -> None:
        """Script the result for commands starting with ``prefix`` (latest wins)."""
        if missing:
            raises = FileNotFoundError(2, "No such file or directory", prefix[0])
        self._responses.append((tuple(prefix), returncode, stdout, stderr, raises))

    def __call__(self, args, **kwargs):
        argv = [str(arg) for arg in args]
        self.calls.append(RecordedCall(argv, kwargs))
        for prefix, returncode, stdout, stderr, raises in reversed(self._responses):
            if tuple(argv[: len(prefix)]) == prefix:
                if raises is not None:
                    raise raises
                return subprocess.CompletedProcess(argv, returncode, stdout, stderr)
        return subprocess.CompletedProcess(argv, 0, "", "")

    @property
    def commands(self) -> list[list[str]]:
        return [call.args for call in self.calls]

    def find(self, *prefix: str) -> list[RecordedCall]:
        return [call for call in self.calls if tuple(call.args[: len(prefix)]) == prefix]

    def position(self, *prefix: str) -> int:
        for index, call in enumerate(self.calls):
            if tuple(call.args[: len(prefix)]) == prefix:
                return index
        raise AssertionError(f"{' '.join(prefix)} was never run; ran {self.commands}")


@pytest.fixture()
def fake_subprocess(monkeypatch) -> FakeSubprocess:
    fake = FakeSubprocess()
    monkeypatch.setattr(subprocess, "run", fake)
    return fake


@pytest.fixture()
def project_dirs(tmp_path: Path) -> dict[str, Path]:
    dirs = {}
    for name in ("api", "web", "worker"):
        path = tmp_path / "projects" / name
        path.mkdir(parents=True)
        dirs[name] = path
    return dirs


@pytest.fixture()
def config_file(tmp_path: Path, project_dirs: dict[str, Path]) -> Path:
    path = tmp_path / ".moby.yaml"
    path.write_text(
        CONFIG_TEMPLATE.format(
            api_path=project_dirs["api"],
            web_path=project_dirs["web"],
            worker_path=project_dirs["worker"],
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture()
def resolver(config_file: Path) -> ConfigResolver:
    return ConfigResolver(config_file)
