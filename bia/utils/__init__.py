"""Utility modules for logging and run-scoped context."""

from bia.utils.logging import bind_run_context, clear_run_context, configure_logging, get_logger

__all__ = ["configure_logging", "get_logger", "bind_run_context", "clear_run_context"]
