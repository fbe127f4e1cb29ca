"""Monitoring and metrics middleware using Prometheus."""
import logging
import time

from flask import Flask, g, request
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST

logger = logging.getLogger(__name__)

# Prometheus metrics
http_requests_total = Counter(
    'http_requests_total',
    'Total number of HTTP requests',
    ['method', 'endpoint', 'status']
)

http_request_duration = Histogram(
    'http_request_duration_seconds',
    'Time spent processing HTTP requests',
    ['endpoint'],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0]
)

db_queries_total = Counter(
    'db_queries_total',
    'Total number of database statements executed',
    ['operation']
)

db_query_duration_seconds = Histogram(
    'db_query_duration_seconds',
    'Time spent executing database statements',
    ['operation'],
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0]
)


def register_metrics_middleware(app: Flask) -> None:
    """
    Register Prometheus metrics endpoint and per-request metrics.

    Args:
        app: Flask application instance
    """
    if not app.config.get("ENABLE_METRICS", True):
        return

    @app.route('/metrics')
    def metrics():
        """Prometheus metrics endpoint."""
        return generate_latest(), 200, {'Content-Type': CONTENT_TYPE_LATEST}

    @app.before_request
    def start_timer():
        g.request_start_time = time.time()

    @app.after_request
    def record_request(response):
        endpoint = request.url_rule.rule if request.url_rule else "unmatched"
        try:
            http_requests_total.labels(
                method=request.method,
                endpoint=endpoint,
                status=response.status_code
            ).inc()
            start_time = g.get("request_start_time")
            if start_time is not None:
                http_request_duration.labels(endpoint=endpoint).observe(time.time() - start_time)
        except Exception as e:
            # Don't fail the request if metrics tracking fails
            logger.debug(f"Failed to track request metrics: {e}")
        return response

    logger.info("Prometheus metrics enabled at /metrics")
