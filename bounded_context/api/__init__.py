"""API endpoints module.

This module contains all HTTP API endpoints organized by domain.
"""

from bounded_context.api.health import health_blueprint
from bounded_context.api.jobs import jobs_blueprint
from bounded_context.api.line_items import line_items_blueprint

__all__ = [
    "health_blueprint",
    "jobs_blueprint",
    "line_items_blueprint",
]
