"""Tests for ``moby deploy`` command wiring and exit codes."""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from moby_cli import app

runner = CliRunner()


@pytest.fixture()
def aws(fake_subprocess):
    fake_subprocess.on("aws", "configure", "get", "region", stdout="eu-west-1\n")
    fake_subprocess.on("aws", "sts", stdout="123456789012\n")
    fake_subprocess.on("aws", "ecr", "get-login-password", stdout="pw")
    fake_subprocess.on("git", "rev-parse", stdout="abc1234\n")
    return fake_subprocess


def _invoke(config_file: Path, *args: str):
    return runner.invoke(app, ["--config", str(config_file), "deploy", *args])


def test_build_uses_git_revision(aws, config_file: Path) -> None:
    result = _invoke(config_file, "build", "api")

    assert result.exit_code == 0, result.output
    assert "Deploying version: abc1234" in result.output
    build = aws.find("docker", "build")[0]
    assert build.args == ["docker", "build", "-t", "api-svc:abc1234", "-t", "api-svc:latest", "."]


def test_build_without_version_or_revision(aws, config_file: Path) -> None:
    aws.on("git", returncode=128, stderr="fatal: not a git repository")

    result = _invoke(config_file, "build", "api")

    assert result.exit_code == 1
    assert "--version" in result.output
    assert aws.find("docker", "build") == []


def test_login_uses_region_option(aws, config_file: Path) -> None:
    result = _invoke(config_file, "login", "api", "--region", "us-west-2")

    assert result.exit_code == 0, result.output
    assert aws.find("aws", "configure") == []
    assert aws.find("aws", "ecr", "get-login-password")[0].args[-1] == "us-west-2"
    login = aws.find("docker", "login")[0]
    assert login.args[-1] == "123456789012.dkr.ecr.us-west-2.amazonaws.com"
    assert aws.find("git") == []


def test_all_reports_remote_image(aws, config_file: Path) -> None:
    result = _invoke(config_file, "all", "api", "--version", "v1.0.0")

    assert result.exit_code == 0, result.output
    assert "Deployment complete" in result.output
    assert "api-svc:v1.0.0" in result.output
    pushes = [call.args[-1] for call in aws.find("docker", "push")]
    assert pushes == [
        "123456789012.dkr.ecr.eu-west-1.amazonaws.com/api-svc:v1.0.0",
        "123456789012.dkr.ecr.eu-west-1.amazonaws.com/api-svc:latest",
    ]


def test_push_identity_failure_exits_nonzero(aws, config_file: Path) -> None:
    aws.on("aws", "sts", returncode=255, stderr="Unable to locate credentials")

    result = _invoke(config_file, "push", "api", "--version", "v1.0.0")

    assert result.exit_code == 1
    assert "Unable to locate credentials" in result.output
    assert aws.find("docker", "push") == []


def test_project_argument_required(aws, config_file: Path) -> None:
    result = _invoke(config_file, "all")

    assert result.exit_code != 0
    assert aws.calls == []


def test_build_with_file_as_project_path(aws, tmp_path: Path) -> None:
    not_a_dir = tmp_path / "api.txt"
    not_a_dir.write_text("", encoding="utf-8")
    config = tmp_path / "bad.yaml"
    config.write_text(f"projects:\n  api:\n    path: {not_a_dir}\n", encoding="utf-8")

    result = _invoke(config, "build", "api", "--version", "v1")

    assert result.exit_code == 1
    assert "not a directory" in " ".join(result.output.split())
    assert aws.find("docker") == []


def test_login_accepts_version_option(aws, config_file: Path) -> None:
    result = _invoke(config_file, "login", "api", "--version", "v1.0.0")

    assert result.exit_code == 0, result.output
    assert aws.find("docker", "login")
