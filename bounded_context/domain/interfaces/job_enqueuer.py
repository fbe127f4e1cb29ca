"""Interface for enqueuing one-off job runs."""
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone


class IJobEnqueuer(ABC):
    """Supports enqueuing of one-off job runs."""

    @abstractmethod
    def enqueue_job(self, job_name_prefix: str) -> None:
        """
        Enqueue a run of the single job whose name starts with the given prefix.

        Args:
            job_name_prefix: Prefix of the job's name, e.g. "ReportLineItemTotals"
        """
        pass

    @abstractmethod
    def schedule_job(self, job_name_prefix: str, instant: datetime) -> None:
        """
        Schedule a run of the single job whose name starts with the given prefix.

        Args:
            job_name_prefix: Prefix of the job's name
            instant: Timezone-aware moment at which to run the job
        """
        pass

    def schedule_job_after(self, job_name_prefix: str, delay: timedelta) -> None:
        """Schedule a run of the matching job after the given delay."""
        self.schedule_job(job_name_prefix, datetime.now(timezone.utc) + delay)
