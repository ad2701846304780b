"""Deployment of project images to AWS ECR."""

from moby_cli.deploy.service import DeployService, resolve_version

__all__ = ["DeployService", "resolve_version"]
