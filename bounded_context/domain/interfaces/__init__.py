"""Domain interfaces following Dependency Inversion Principle."""

from bounded_context.domain.interfaces.line_item_repository import ILineItemRepository
from bounded_context.domain.interfaces.job_enqueuer import IJobEnqueuer

__all__ = [
    "ILineItemRepository",
    "IJobEnqueuer",
]
