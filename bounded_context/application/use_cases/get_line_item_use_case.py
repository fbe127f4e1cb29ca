"""Use case for reading line items (Use Case Pattern)."""
import logging
from typing import List, Optional

from bounded_context.application.use_cases.create_line_item_use_case import RepositoryScope
from bounded_context.domain.entities.external_id import ExternalId
from bounded_context.domain.entities.line_item import LineItem

logger = logging.getLogger(__name__)


class GetLineItemUseCase:
    """Use case for reading stored line items, exactly as they were stored."""

    MAX_LIMIT = 500

    def __init__(self, repository_scope: RepositoryScope):
        self.repository_scope = repository_scope

    def execute(self, external_id: str) -> Optional[LineItem]:
        """
        Find a line item by external id.

        Raises:
            ValidationError: If the external id itself is malformed
        """
        lookup = ExternalId(external_id)
        with self.repository_scope() as repository:
            return repository.get_by_external_id(lookup)

    def list(self, limit: int = 100) -> List[LineItem]:
        """List line items, most recent first."""
        limit = max(1, min(limit, self.MAX_LIMIT))
        with self.repository_scope() as repository:
            return repository.list_all(limit=limit)
