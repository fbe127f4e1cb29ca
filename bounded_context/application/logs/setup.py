"""Application logging setup."""
import logging
import sys

from bounded_context.application.logs.job_run_log_filter import JobRunLogFilter
from bounded_context.application.logs.metric_log_handler import MetricLogHandler

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
JOB_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(job_run_id)s] %(message)s"


def configure_logging(debug: bool = False, include_job_run: bool = False) -> None:
    """
    Configure application logging.

    Args:
        debug: Whether to log at DEBUG rather than INFO
        include_job_run: Whether to include the job run id in each line (job runner)
    """
    # Send everything to stdout so hosting platforms don't mark normal logs as errors
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format=JOB_LOG_FORMAT if include_job_run else LOG_FORMAT,
        stream=sys.stdout,
        force=True  # Override any existing configuration
    )

    root = logging.getLogger()
    for handler in root.handlers:
        handler.addFilter(JobRunLogFilter())
    root.addHandler(MetricLogHandler())
