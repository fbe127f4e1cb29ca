"""Job enqueuers backed by Celery, and a mock for processes that cannot enqueue."""
import logging
from datetime import datetime
from typing import Optional

from celery import Celery

from bounded_context.domain.interfaces.job_enqueuer import IJobEnqueuer
from bounded_context.jobs import find_job_type

logger = logging.getLogger(__name__)

RUN_JOB_TASK_NAME = "jobs.run"


class CeleryJobEnqueuer(IJobEnqueuer):
    """Enqueues one-off runs of registered jobs on the job runner's broker."""

    def __init__(self, celery: Optional[Celery] = None):
        """
        Initialize the enqueuer.

        Args:
            celery: Celery application (defaults to the job runner's)
        """
        if celery is None:
            from bounded_context.infrastructure.celery_app import celery_app
            celery = celery_app
        self.celery = celery

    def enqueue_job(self, job_name_prefix: str) -> None:
        job_type = find_job_type(job_name_prefix)
        self.celery.send_task(RUN_JOB_TASK_NAME, args=(job_type.__name__,))
        logger.info(f"Enqueued job {job_type.__name__}")

    def schedule_job(self, job_name_prefix: str, instant: datetime) -> None:
        if instant.tzinfo is None:
            raise ValueError(f"Refusing to schedule at a naive datetime, as its timezone is ambiguous: {instant}")
        job_type = find_job_type(job_name_prefix)
        self.celery.send_task(RUN_JOB_TASK_NAME, args=(job_type.__name__,), eta=instant)
        logger.info(f"Scheduled job {job_type.__name__} at {instant.isoformat()}")


class MockJobEnqueuer(IJobEnqueuer):
    """
    Satisfies the requirement of an IJobEnqueuer in processes without access to the job runner's broker.

    To support enqueuing jobs from the API, enable JOB_ENQUEUING_ENABLED deliberately.
    """

    _MESSAGE = (
        "The API does not currently have the ability to enqueue jobs. "
        "Job runner connectivity would need to be deliberately enabled first."
    )

    def enqueue_job(self, job_name_prefix: str) -> None:
        raise NotImplementedError(self._MESSAGE)

    def schedule_job(self, job_name_prefix: str, instant: datetime) -> None:
        raise NotImplementedError(self._MESSAGE)
