"""Rate limiting middleware using Flask-Limiter."""
import logging

from flask import Flask
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

logger = logging.getLogger(__name__)

DEFAULT_LIMITS = ["1000 per hour", "100 per minute"]


def get_limiter_key() -> str:
    """
    Get rate limit key based on the client's IP address.

    Returns:
        String key for rate limiting
    """
    return f"rate_limit:ip:{get_remote_address()}"


def create_rate_limiter(app: Flask) -> Limiter:
    """
    Create and configure Flask-Limiter instance.

    Args:
        app: Flask application instance

    Returns:
        Configured Limiter instance
    """
    if not app.config.get("RATELIMIT_ENABLED", True):
        # No-op limiter when rate limiting is disabled
        return Limiter(
            get_remote_address,
            app=app,
            default_limits=[],
            storage_uri="memory://",
            enabled=False,
        )

    storage_uri = app.config.get("RATELIMIT_STORAGE_URL") or "memory://"
    try:
        limiter = Limiter(
            get_limiter_key,
            app=app,
            default_limits=DEFAULT_LIMITS,
            storage_uri=storage_uri,
            strategy="fixed-window",
            headers_enabled=True
        )
        logger.info("Rate limiting enabled")
        return limiter
    except Exception as e:
        logger.warning(f"Failed to initialize rate limiter: {e}, using memory storage")
        return Limiter(
            get_limiter_key,
            app=app,
            default_limits=DEFAULT_LIMITS,
            storage_uri="memory://"
        )
