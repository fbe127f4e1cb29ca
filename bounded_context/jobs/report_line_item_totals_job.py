"""Job that reports line item totals."""
import logging

from bounded_context.jobs.base import Job

logger = logging.getLogger(__name__)


class ReportLineItemTotalsJob(Job):
    """Logs the number of line items and their monetary total, hourly."""

    cron_schedule = "0 * * * *"

    def execute(self) -> None:
        with self.container.line_item_repository_scope() as repository:
            count = repository.count()
            total = repository.total_price()
        logger.info(f"Line item totals: count={count}, total_price={total}")
