"""Annotates job runs with ambient information.

First, it sets an ambient job run annotation for the duration of the run,
exposing a unique id for the run. Log records emitted during the run carry
it (see JobRunLogFilter).

Second, it exposes a "job_runs_total" counter metric (scrapable via
Prometheus), keeping track of when each job was run.

The annotation lives in a ContextVar, so it is scoped to the running thread
or task and is released when the run completes or fails.
"""
import logging
import threading
import uuid
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass
from typing import Dict, Hashable, Iterator, Optional

from prometheus_client import Counter

logger = logging.getLogger(__name__)

job_runs_total = Counter(
    'job_runs_total',
    'Tracks the starting of jobs over time',
    ['job_name']
)


@dataclass(frozen=True)
class JobRunAnnotation:
    """The ambient annotation of a single job run."""

    job_name: str
    job_run_id: str


_current_job_run: ContextVar[Optional[JobRunAnnotation]] = ContextVar("current_job_run", default=None)


def current_job_run() -> Optional[JobRunAnnotation]:
    """The annotation of the job run executing in the current context, if any."""
    return _current_job_run.get()


class JobRunAnnotator:
    """Starts and ends job run annotations, keyed by the identifier of each firing of a job."""

    def __init__(self):
        self._tokens: Dict[Hashable, Token] = {}
        self._lock = threading.Lock()

    def job_will_run(self, job_name: str, job_run_instance_id: Hashable) -> JobRunAnnotation:
        """
        Annotate the current context with a new job run.

        Args:
            job_name: Name of the job about to run
            job_run_instance_id: Identifier of this firing of the job, e.g. a task id

        Returns:
            The annotation now in effect
        """
        job_runs_total.labels(job_name=job_name).inc()

        annotation = JobRunAnnotation(job_name=job_name, job_run_id=f"{job_name}_{uuid.uuid4().hex[16:]}")
        token = _current_job_run.set(annotation)
        with self._lock:
            self._tokens[job_run_instance_id] = token

        logger.info(f"Job {job_name} will run")
        return annotation

    def job_did_run(self, job_run_instance_id: Hashable) -> None:
        """Remove the annotation of the given job run, whether it succeeded or failed."""
        with self._lock:
            token = self._tokens.pop(job_run_instance_id, None)
        if token is None:
            return

        try:
            _current_job_run.reset(token)
        except ValueError:
            # The run ended in a different context than it started in
            _current_job_run.set(None)

    @contextmanager
    def annotate(self, job_name: str) -> Iterator[JobRunAnnotation]:
        """Annotate the current context for the duration of the with-block."""
        job_run_instance_id = object()
        annotation = self.job_will_run(job_name, job_run_instance_id)
        try:
            yield annotation
        finally:
            self.job_did_run(job_run_instance_id)
