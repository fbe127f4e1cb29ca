"""Base type for recurring jobs run by the job runner."""
from abc import ABC, abstractmethod


class JobAlreadyRunningError(Exception):
    """Another run of the same job holds its concurrency lock."""


class Job(ABC):
    """
    A recurring job.

    Each job runs on its cron schedule (via Celery beat) and can be enqueued
    or scheduled as a one-off run through an IJobEnqueuer. Runs of the same
    job never execute concurrently.
    """

    def __init__(self, container):
        """
        Initialize job with dependencies.

        Args:
            container: ServiceContainer providing the job's dependencies
        """
        self.container = container

    @property
    def name(self) -> str:
        return type(self).__name__

    @property
    @abstractmethod
    def cron_schedule(self) -> str:
        """Five-field cron expression: minute hour day-of-month month day-of-week."""
        pass

    @abstractmethod
    def execute(self) -> None:
        """Run the job once."""
        pass
