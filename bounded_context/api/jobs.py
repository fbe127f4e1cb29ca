"""Job API endpoints."""
import logging
from datetime import timedelta

from flask import Blueprint, jsonify, request

from bounded_context.api.container import get_container

jobs_blueprint = Blueprint("jobs", __name__)
_logger = logging.getLogger(__name__)


@jobs_blueprint.route("/api/jobs/<job_name_prefix>", methods=["POST"])
def enqueue_job(job_name_prefix: str):
    """
    Enqueue a one-off run of a registered job.

    Query parameters:
        delay_seconds: Optional delay before the run

    Returns:
        202 when enqueued, 404 for an unknown job, 501 when this process
        cannot reach the job runner
    """
    delay_seconds = request.args.get("delay_seconds", default=0, type=int)
    enqueuer = get_container().get_job_enqueuer()

    try:
        if delay_seconds > 0:
            enqueuer.schedule_job_after(job_name_prefix, timedelta(seconds=delay_seconds))
        else:
            enqueuer.enqueue_job(job_name_prefix)
    except ValueError as e:
        return jsonify({"status": "error", "message": str(e)}), 404

    _logger.info(f"Job {job_name_prefix}* enqueued via API")
    return jsonify({"status": "accepted", "job": job_name_prefix}), 202
