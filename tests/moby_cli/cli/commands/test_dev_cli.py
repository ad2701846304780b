"""Tests for ``moby dev`` command wiring and exit codes."""

from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from moby_cli import app

runner = CliRunner()


def _invoke(config_file: Path, *args: str):
    return runner.invoke(app, ["--config", str(config_file), "dev", *args])


def test_start_reports_url(fake_subprocess, config_file: Path) -> None:
    fake_subprocess.on("git", "rev-parse", stdout="abc1234\n")

    result = _invoke(config_file, "start", "api")

    assert result.exit_code == 0, result.output
    assert "Container started" in result.output
    assert "http://localhost:8080" in result.output
    assert fake_subprocess.find("docker", "run")


def test_start_with_port_option(fake_subprocess, config_file: Path) -> None:
    result = _invoke(config_file, "start", "web", "--port", "4000")

    assert result.exit_code == 0, result.output
    run = fake_subprocess.find("docker", "run")[0]
    assert "4000:4000" in run.args


def test_start_existing_container_exits_nonzero(fake_subprocess, config_file: Path) -> None:
    fake_subprocess.on("docker", "ps", stdout="api-dev\n")

    result = _invoke(config_file, "start", "api")

    assert result.exit_code == 1
    assert "already exists" in result.output
    assert fake_subprocess.find("docker", "build") == []


def test_unknown_project_exits_nonzero(fake_subprocess, config_file: Path) -> None:
    result = _invoke(config_file, "stop", "nope")

    assert result.exit_code == 1
    assert "nope not found" in result.output
    assert fake_subprocess.calls == []


def test_project_required(fake_subprocess, config_file: Path) -> None:
    result = _invoke(config_file, "restart")

    assert result.exit_code == 1
    assert "Project name is required" in result.output


def test_missing_config_file(fake_subprocess, tmp_path: Path) -> None:
    result = _invoke(tmp_path / "absent.yaml", "start", "api")

    assert result.exit_code == 1
    assert "not found" in result.output


def test_stop_succeeds_when_container_absent(fake_subprocess, config_file: Path) -> None:
    fake_subprocess.on("docker", "stop", returncode=1, stderr="No such container")
    fake_subprocess.on("docker", "rm", returncode=1, stderr="No such container")

    result = _invoke(config_file, "stop", "api")

    assert result.exit_code == 0, result.output
    assert "stopped and removed" in result.output


def test_logs_follow_flag(fake_subprocess, config_file: Path) -> None:
    result = _invoke(config_file, "logs", "api", "--follow")

    assert result.exit_code == 0, result.output
    assert fake_subprocess.commands == [["docker", "logs", "-f", "api-dev"]]


def test_ps_without_project(fake_subprocess, config_file: Path) -> None:
    result = _invoke(config_file, "ps")

    assert result.exit_code == 0, result.output
    assert "--filter" not in fake_subprocess.calls[0].args


def test_ps_filters_by_project(fake_subprocess, config_file: Path) -> None:
    result = _invoke(config_file, "ps", "api")

    assert result.exit_code == 0, result.output
    assert "name=api-dev" in fake_subprocess.calls[0].args


def test_prune(fake_subprocess, config_file: Path) -> None:
    result = _invoke(config_file, "prune")

    assert result.exit_code == 0, result.output
    assert fake_subprocess.commands == [["docker", "container", "prune", "-f"]]


def test_docker_failure_exits_nonzero(fake_subprocess, config_file: Path) -> None:
    fake_subprocess.on("docker", "container", "prune", returncode=1, stderr="daemon not running")

    result = _invoke(config_file, "prune")

    assert result.exit_code == 1
    assert "daemon not running" in result.output


def test_unknown_subcommand(fake_subprocess, config_file: Path) -> None:
    result = _invoke(config_file, "explode", "api")

    assert result.exit_code != 0
    assert fake_subprocess.calls == []


def test_port_option_accepted_by_every_project_command(fake_subprocess, config_file: Path) -> None:
    for command in ("stop", "logs", "clean", "ps"):
        result = _invoke(config_file, command, "api", "--port", "8080")
        assert result.exit_code == 0, (command, result.output)

    result = _invoke(config_file, "prune", "--port", "8080")
    assert result.exit_code == 0, result.output
