"""Flask application factory with dependency injection."""
import logging
from flask import Flask, jsonify

from bounded_context.api import health_blueprint, jobs_blueprint, line_items_blueprint
from bounded_context.application.logs import configure_logging
from bounded_context.config.settings import get_config
from bounded_context.infrastructure.service_container import ServiceContainer
from bounded_context.middleware.error_handler import init_error_handlers
from bounded_context.middleware.monitoring import register_metrics_middleware
from bounded_context.middleware.rate_limiter import create_rate_limiter


def create_app(config_class=None) -> Flask:
    """
    Create and configure Flask application with dependency injection.

    Args:
        config_class: Optional configuration class (for testing)

    Returns:
        Configured Flask application
    """
    _logger = logging.getLogger(__name__)

    app = Flask(__name__)

    config = config_class or get_config()
    app.config.from_object(config)

    # Configure logging FIRST (needed for all subsequent operations)
    configure_logging(debug=config.DEBUG)

    # Health checks respond even while the rest is initializing
    app.register_blueprint(health_blueprint)
    app.register_blueprint(line_items_blueprint)
    app.register_blueprint(jobs_blueprint)

    @app.route("/", methods=["GET"])
    def root():
        """Root endpoint for testing."""
        return jsonify({
            "status": "ok",
            "service": config.SERVICE_NAME,
            "message": "Service is running"
        }), 200

    try:
        config.validate()
    except ValueError as e:
        _logger.critical(f"Invalid configuration: {e}")
        raise

    _initialize_middleware(app)
    _initialize_services(app, config)

    _logger.info(f"Application ready - registered blueprints: {[bp.name for bp in app.blueprints.values()]}")
    return app


def _initialize_middleware(app: Flask) -> None:
    """
    Initialize middleware (rate limiting, monitoring, error handling).

    Args:
        app: Flask application instance
    """
    app.config['limiter'] = create_rate_limiter(app)
    register_metrics_middleware(app)
    init_error_handlers(app)


def _initialize_services(app: Flask, config: type) -> None:
    """
    Initialize application services using Service Container.

    The database is created eagerly so that a broken storage mapping (e.g. a
    misconfigured wrapper value object) fails startup rather than a request.

    Args:
        app: Flask application instance
        config: Configuration class
    """
    _logger = logging.getLogger(__name__)

    container = ServiceContainer.configure(config)
    app.config['service_container'] = container

    database = container.get_database()
    if not database.ping():
        _logger.warning("Database is not reachable yet; /health/ready will report not_ready")

    # Redis is optional; without it jobs run unlocked
    if container.get_redis_client():
        _logger.info("Infrastructure initialized with Redis")
    else:
        _logger.info("Infrastructure initialized without Redis")
