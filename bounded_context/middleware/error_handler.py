"""Error handling middleware with Sentry integration."""
import logging

import sentry_sdk
from flask import Flask, jsonify, request
from sentry_sdk.integrations.celery import CeleryIntegration
from sentry_sdk.integrations.flask import FlaskIntegration
from werkzeug.exceptions import ClientDisconnected, HTTPException

from bounded_context.domain.exceptions import ValidationError

logger = logging.getLogger(__name__)


def init_sentry(dsn: str, environment: str) -> None:
    """
    Initialize Sentry error tracking.

    Args:
        dsn: Sentry DSN
        environment: Environment name reported with each event
    """
    sentry_sdk.init(
        dsn=dsn,
        integrations=[
            FlaskIntegration(),
            CeleryIntegration(),
        ],
        traces_sample_rate=0.1,
        environment=environment,
    )
    logger.info("Sentry error tracking initialized")


def init_error_handlers(app: Flask) -> None:
    """
    Initialize error handlers for the application.

    Validation errors become 400 responses carrying their error code. Any
    other unhandled exception is logged and becomes a 500, except for
    clients that disconnected mid-request, which are only noted.

    Args:
        app: Flask application instance
    """
    dsn = app.config.get("SENTRY_DSN")
    if dsn:
        init_sentry(dsn, environment=app.config.get("ENV", "production"))

    @app.errorhandler(ValidationError)
    def validation_error(error: ValidationError):
        """Handle domain validation errors."""
        logger.debug(f"Validation error on {request.path}: {error.error_code}")
        return jsonify({"status": "error", **error.to_dict()}), 400

    @app.errorhandler(NotImplementedError)
    def not_implemented(error: NotImplementedError):
        """Handle capabilities this process deliberately lacks."""
        logger.warning(f"Not implemented on {request.path}: {error}")
        return jsonify({"status": "error", "message": str(error)}), 501

    @app.errorhandler(404)
    def not_found(error):
        """Handle 404 errors."""
        return jsonify({"status": "error", "message": "Resource not found"}), 404

    @app.errorhandler(429)
    def rate_limit_error(error):
        """Handle rate limit errors."""
        return jsonify({
            "status": "error",
            "message": "Rate limit exceeded. Please try again later."
        }), 429

    @app.errorhandler(Exception)
    def unhandled_exception(error: Exception):
        """Handle everything else."""
        if isinstance(error, ClientDisconnected):
            logger.info(f"Client disconnected during {request.method} {request.path}")
            return jsonify({"status": "error", "message": "Client disconnected"}), 400

        if isinstance(error, HTTPException):
            return jsonify({"status": "error", "message": error.description}), error.code

        logger.error(f"Internal server error on {request.method} {request.path}: {error}", exc_info=error)
        return jsonify({"status": "error", "message": "Internal server error"}), 500
