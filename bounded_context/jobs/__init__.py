"""Recurring jobs and their registry."""
from typing import List, Type

from bounded_context.jobs.base import Job, JobAlreadyRunningError
from bounded_context.jobs.report_line_item_totals_job import ReportLineItemTotalsJob

# Removing a job here also removes it from the beat schedule
JOB_TYPES: List[Type[Job]] = [
    ReportLineItemTotalsJob,
]


def find_job_type(job_name_prefix: str) -> Type[Job]:
    """
    Find the single registered job whose name starts with the given prefix.

    Raises:
        ValueError: If no job, or more than one job, matches
    """
    matches = [job_type for job_type in JOB_TYPES if job_type.__name__.startswith(job_name_prefix or "")]
    if not job_name_prefix or not matches:
        raise ValueError(f"No job named {job_name_prefix}* was found.")
    if len(matches) > 1:
        raise ValueError(
            f"Job name {job_name_prefix}* is ambiguous: {', '.join(job_type.__name__ for job_type in matches)}."
        )
    return matches[0]


__all__ = [
    "Job",
    "JobAlreadyRunningError",
    "JOB_TYPES",
    "ReportLineItemTotalsJob",
    "find_job_type",
]
