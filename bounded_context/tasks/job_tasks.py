"""Celery tasks that run the registered jobs."""
import logging

from celery import Task
from celery.signals import task_postrun, task_prerun

from bounded_context.application.jobs.job_run_annotator import JobRunAnnotator
from bounded_context.domain.exceptions import DeveloperError
from bounded_context.infrastructure.celery_app import celery_app
from bounded_context.infrastructure.jobs.job_enqueuers import RUN_JOB_TASK_NAME
from bounded_context.infrastructure.jobs.job_lock import no_concurrent_execution
from bounded_context.infrastructure.service_container import ServiceContainer
from bounded_context.jobs import find_job_type

logger = logging.getLogger(__name__)

job_run_annotator = JobRunAnnotator()


class JobTask(Task):
    """Task class that logs job failures."""

    def on_failure(self, exc, task_id, args, kwargs, einfo):
        """Handle task failure."""
        logger.error(f"Job task {task_id} failed: {exc}", exc_info=einfo)


@task_prerun.connect
def annotate_job_run(sender=None, task_id=None, task=None, args=None, **kwargs):
    """Annotate the run before the job starts."""
    if task is None or task.name != RUN_JOB_TASK_NAME:
        return
    job_name = args[0] if args else "unknown"
    job_run_annotator.job_will_run(job_name, task_id)


@task_postrun.connect
def release_job_run(sender=None, task_id=None, task=None, **kwargs):
    """Release the annotation whether the job succeeded or failed."""
    if task is None or task.name != RUN_JOB_TASK_NAME:
        return
    job_run_annotator.job_did_run(task_id)


@celery_app.task(
    bind=True,
    base=JobTask,
    max_retries=3,
    default_retry_delay=60,
    name=RUN_JOB_TASK_NAME
)
def run_job_task(self, job_name: str) -> None:
    """
    Run a registered job once, never concurrently with itself.

    Args:
        self: Task instance (bound task)
        job_name: Name (or unique name prefix) of the job
    """
    job_type = find_job_type(job_name)
    container = ServiceContainer()
    timeout_seconds = container.get_config().JOB_LOCK_TIMEOUT_SECONDS

    try:
        with no_concurrent_execution(job_type.__name__, timeout_seconds, container.get_redis_client()):
            job_type(container).execute()
        logger.info(f"Job {job_type.__name__} completed")
    except DeveloperError:
        # Logic defects do not go away by retrying
        raise
    except Exception as exc:
        logger.warning(f"Job {job_type.__name__} failed, retrying: {exc}")
        raise self.retry(exc=exc, countdown=60 * (self.request.retries + 1))
