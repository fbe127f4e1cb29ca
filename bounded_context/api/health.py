"""Health check endpoints."""
import logging
from flask import Blueprint, current_app, jsonify

from bounded_context.api.container import get_container

health_blueprint = Blueprint("health", __name__)
_logger = logging.getLogger(__name__)


@health_blueprint.route("/health", methods=["GET"])
def health_check():
    """
    Basic health check endpoint.

    Returns:
        JSON response with health status
    """
    return jsonify({
        "status": "healthy",
        "service": current_app.config.get("SERVICE_NAME")
    }), 200


@health_blueprint.route("/health/ready", methods=["GET"])
def readiness_check():
    """
    Readiness check endpoint (checks dependencies).

    The database is required. Redis is only checked when it is configured.

    Returns:
        JSON response with readiness status
    """
    container = get_container()
    checks = {
        "database": False,
        "overall": False
    }

    try:
        checks["database"] = container.get_database().ping()
    except Exception as e:
        _logger.error(f"Database health check failed: {e}")

    if current_app.config.get("REDIS_URL"):
        checks["redis"] = False
        try:
            redis_client = container.get_redis_client()
            checks["redis"] = bool(redis_client and redis_client.ping())
        except Exception as e:
            _logger.error(f"Redis health check failed: {e}")

    checks["overall"] = checks["database"] and checks.get("redis", True)

    status_code = 200 if checks["overall"] else 503

    return jsonify({
        "status": "ready" if checks["overall"] else "not_ready",
        "checks": checks
    }), status_code


@health_blueprint.route("/health/live", methods=["GET"])
def liveness_check():
    """
    Liveness check endpoint (for Kubernetes).

    Returns:
        JSON response with liveness status
    """
    return jsonify({
        "status": "alive",
        "service": current_app.config.get("SERVICE_NAME")
    }), 200
