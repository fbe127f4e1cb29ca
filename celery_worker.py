"""Job runner entry point.

Runs the Celery worker (and, with ``beat``, the scheduler) for the registered
jobs. Logs go to stdout and carry the id of the job run they belong to.

Usage:
    celery -A celery_worker worker --beat --loglevel=info
"""
import os

from bounded_context.application.logs import configure_logging

# Configure logging BEFORE importing Celery to ensure all logs go to stdout
configure_logging(debug=os.getenv("DEBUG", "false").lower() == "true", include_job_run=True)

from bounded_context.config.settings import get_config  # noqa: E402
from bounded_context.infrastructure.celery_app import celery_app  # noqa: E402
from bounded_context.infrastructure.service_container import ServiceContainer  # noqa: E402
from bounded_context.middleware.error_handler import init_sentry  # noqa: E402

config = get_config()
config.validate()
ServiceContainer.configure(config)
if config.SENTRY_DSN:
    init_sentry(config.SENTRY_DSN, environment=os.getenv("FLASK_ENV", "production"))

if __name__ == "__main__":
    celery_app.start()
