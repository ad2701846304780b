"""CLI helpers exposed for other modules."""

from .helpers import configure_logging, console, err_console, resolver_from, run_or_exit

__all__ = ["configure_logging", "console", "err_console", "resolver_from", "run_or_exit"]
