"""AWS ECR helpers built on the aws and docker CLIs."""

from __future__ import annotations

import logging

from moby_cli.core.constants import DEFAULT_REGION, ECR_USERNAME
from moby_cli.core.exceptions import CommandFailure
from moby_cli.core.shell import run_command

__all__ = [
    "ensure_repository",
    "get_account_id",
    "get_aws_region",
    "get_login_password",
    "login",
    "registry_host",
    "repository_url",
]

logger = logging.getLogger(__name__)


def get_aws_region(explicit: str | None = None) -> str:
    """Explicit region, else the aws CLI default, else us-east-1."""
    if explicit:
        return explicit
    try:
        result = run_command(["aws", "configure", "get", "region"], quiet=True)
    except CommandFailure:
        logger.debug("No region in aws CLI configuration, using %s", DEFAULT_REGION)
        return DEFAULT_REGION
    return result.stdout.strip() or DEFAULT_REGION


def get_account_id() -> str:
    result = run_command(
        ["aws", "sts", "get-caller-identity", "--query", "Account", "--output", "text"],
        quiet=True,
    )
    return result.stdout.strip()


def registry_host(account_id: str, region: str) -> str:
    return f"{account_id}.dkr.ecr.{region}.amazonaws.com"


def repository_url(account_id: str, region: str, image_name: str) -> str:
    return f"{registry_host(account_id, region)}/{image_name}"


def get_login_password(region: str) -> str:
    result = run_command(["aws", "ecr", "get-login-password", "--region", region], quiet=True)
    return result.stdout


def login(region: str, account_id: str | None = None) -> str:
    """Log docker into the account's ECR registry and return its host."""
    account_id = account_id or get_account_id()
    host = registry_host(account_id, region)
    password = get_login_password(region)
    run_command(
        ["docker", "login", "--username", ECR_USERNAME, "--password-stdin", host],
        input_text=password,
    )
    return host


def ensure_repository(repository: str, region: str) -> bool:
    """Create the ECR repository unless it already exists.

    Returns True when the repository had to be created.
    """
    try:
        run_command(
            [
                "aws", "ecr", "describe-repositories",
                "--repository-names", repository,
                "--region", region,
            ],
            quiet=True,
        )
    except CommandFailure:
        logger.debug("Repository %s not found in %s, creating", repository, region)
    else:
        return False

    run_command(
        [
            "aws", "ecr", "create-repository",
            "--repository-name", repository,
            "--region", region,
        ]
    )
    return True
