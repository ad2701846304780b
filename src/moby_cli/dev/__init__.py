"""Local development container management."""

from moby_cli.dev.service import DevService, list_containers, prune_containers

__all__ = ["DevService", "list_containers", "prune_containers"]
