"""Adds the current job run annotation to log records."""
import logging

from bounded_context.application.jobs.job_run_annotator import current_job_run


class JobRunLogFilter(logging.Filter):
    """Sets ``job_name`` and ``job_run_id`` on every record ("-" outside of job runs)."""

    def filter(self, record: logging.LogRecord) -> bool:
        annotation = current_job_run()
        record.job_name = annotation.job_name if annotation else "-"
        record.job_run_id = annotation.job_run_id if annotation else "-"
        return True
