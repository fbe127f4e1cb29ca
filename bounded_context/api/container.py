"""Access to the service container from request handlers."""
import logging

from flask import current_app

from bounded_context.infrastructure.service_container import ServiceContainer

_logger = logging.getLogger(__name__)


def get_container() -> ServiceContainer:
    """Get the application's service container, creating it on demand."""
    container = current_app.config.get('service_container')
    if not container:
        _logger.warning("Service container not in app.config, creating new instance")
        container = ServiceContainer()
        current_app.config['service_container'] = container
    return container
