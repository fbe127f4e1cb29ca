"""Prevents concurrent runs of the same job."""
import logging
from contextlib import contextmanager
from typing import Iterator, Optional

import redis
from redis.exceptions import LockError

from bounded_context.infrastructure.redis_client import RedisClientFactory
from bounded_context.jobs.base import JobAlreadyRunningError

logger = logging.getLogger(__name__)


@contextmanager
def no_concurrent_execution(
    job_name: str,
    timeout_seconds: int,
    redis_client: Optional[redis.Redis] = None,
) -> Iterator[None]:
    """
    Hold a per-job Redis lock for the duration of the with-block.

    Waits up to ``timeout_seconds`` for a concurrent run to finish. The lock
    itself expires after ``timeout_seconds`` so a crashed worker cannot keep
    the job blocked forever.

    Args:
        job_name: Name of the job
        timeout_seconds: Maximum wait for, and lifetime of, the lock
        redis_client: Redis client (defaults to the shared client)

    Raises:
        JobAlreadyRunningError: If the lock could not be acquired in time
    """
    client = redis_client or RedisClientFactory.get_client()
    if client is None:
        logger.warning(f"Redis unavailable, running job {job_name} without a concurrency lock")
        yield
        return

    lock = client.lock(f"job-lock:{job_name}", timeout=timeout_seconds, blocking_timeout=timeout_seconds)
    if not lock.acquire():
        raise JobAlreadyRunningError(f"Job {job_name} is still running elsewhere after {timeout_seconds}s.")

    try:
        yield
    finally:
        try:
            lock.release()
        except LockError:
            logger.warning(f"Lock for job {job_name} expired before the run completed")
