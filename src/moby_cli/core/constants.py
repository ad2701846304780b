"""Shared constants for moby configuration and Docker/ECR invocations."""

from __future__ import annotations

CONFIG_FILENAME = ".moby.yaml"
CONFIG_ENV_VAR = "MOBY_CONFIG"
LOG_LEVEL_ENV_VAR = "MOBY_LOG_LEVEL"

ECR_ENV_FILENAME = ".env.ecr"

DEFAULT_REGION = "us-east-1"
ECR_USERNAME = "AWS"

DEV_TAG = "dev"
LATEST_TAG = "latest"

PS_TABLE_FORMAT = "table {{.ID}}\t{{.Names}}\t{{.Status}}\t{{.Ports}}\t{{.Image}}"

__all__ = [
    "CONFIG_ENV_VAR",
    "CONFIG_FILENAME",
    "DEFAULT_REGION",
    "DEV_TAG",
    "ECR_ENV_FILENAME",
    "ECR_USERNAME",
    "LATEST_TAG",
    "LOG_LEVEL_ENV_VAR",
    "PS_TABLE_FORMAT",
]
