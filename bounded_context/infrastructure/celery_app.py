"""Celery application factory for the job runner."""
import logging
from typing import Dict

from celery import Celery
from celery.schedules import crontab

from bounded_context.config.settings import Config
from bounded_context.jobs import JOB_TYPES
from bounded_context.infrastructure.jobs.job_enqueuers import RUN_JOB_TASK_NAME

logger = logging.getLogger(__name__)


def parse_cron(expression: str) -> crontab:
    """
    Convert a five-field cron expression into a Celery crontab.

    Args:
        expression: "minute hour day-of-month month day-of-week"

    Returns:
        crontab instance

    Raises:
        ValueError: If the expression does not have exactly five fields
    """
    fields = expression.split()
    if len(fields) != 5:
        raise ValueError(f"Expected a five-field cron expression, got: {expression!r}")
    minute, hour, day_of_month, month_of_year, day_of_week = fields
    return crontab(
        minute=minute,
        hour=hour,
        day_of_month=day_of_month,
        month_of_year=month_of_year,
        day_of_week=day_of_week,
    )


def build_beat_schedule() -> Dict[str, dict]:
    """Schedule every registered job on its cron expression."""
    return {
        job_type.__name__: {
            "task": RUN_JOB_TASK_NAME,
            "schedule": parse_cron(job_type.cron_schedule),
            "args": (job_type.__name__,),
        }
        for job_type in JOB_TYPES
    }


def create_celery_app(app=None) -> Celery:
    """
    Create and configure Celery application.

    Args:
        app: Optional Flask app instance

    Returns:
        Configured Celery instance
    """
    celery = Celery(
        Config.SERVICE_NAME,
        broker=Config.CELERY_BROKER_URL,
        backend=Config.CELERY_RESULT_BACKEND,
        include=["bounded_context.tasks.job_tasks"]
    )

    celery.conf.update(
        task_serializer="json",
        accept_content=["json"],
        result_serializer="json",
        timezone="UTC",
        enable_utc=True,
        task_track_started=True,
        task_time_limit=Config.JOB_LOCK_TIMEOUT_SECONDS * 2,
        task_soft_time_limit=Config.JOB_LOCK_TIMEOUT_SECONDS,
        worker_prefetch_multiplier=1,
        worker_max_tasks_per_child=1000,
        task_acks_late=True,
        task_reject_on_worker_lost=True,
        task_ignore_result=True,
        beat_schedule=build_beat_schedule(),

        worker_log_format='[%(asctime)s: %(levelname)s/%(processName)s] %(message)s',
        worker_task_log_format='[%(asctime)s: %(levelname)s/%(processName)s][%(task_name)s(%(task_id)s)] %(message)s',
        worker_hijack_root_logger=False,
    )

    if app:
        celery.conf.update(app.config)

    logger.debug(f"Celery configured with {len(JOB_TYPES)} scheduled job(s)")
    return celery


celery_app = create_celery_app()
