"""Logging configuration and log-derived metrics."""
from bounded_context.application.logs.setup import configure_logging

__all__ = ["configure_logging"]
