"""A logging handler that exposes a metric based on the logged severity."""
import logging

from prometheus_client import Counter

log_count = Counter(
    'log_count',
    'Counts log entries per severity',
    ['severity']
)

# Initialize every label to 0 so the metric is present, which helps prevent the first increase from being ignored
for _severity in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
    log_count.labels(severity=_severity).inc(0)


class MetricLogHandler(logging.Handler):
    """Counts emitted log records per severity in the ``log_count`` metric."""

    def emit(self, record: logging.LogRecord) -> None:
        log_count.labels(severity=record.levelname).inc()
