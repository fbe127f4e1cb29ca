"""Interface for line item repository (Repository Pattern)."""
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List, Optional

from bounded_context.domain.entities.external_id import ExternalId
from bounded_context.domain.entities.line_item import LineItem


class ILineItemRepository(ABC):
    """
    Interface for line item storage following Repository Pattern.

    Implementations restore stored line items without re-validating them.
    """

    @abstractmethod
    def add(self, line_item: LineItem) -> LineItem:
        """
        Persist a new line item.

        Args:
            line_item: Line item to store

        Returns:
            The stored line item, with its id assigned

        Raises:
            PrecisionViolationError: If a decimal carries more precision than storable
        """
        pass

    @abstractmethod
    def get_by_external_id(self, external_id: ExternalId) -> Optional[LineItem]:
        """
        Retrieve a line item by its external id.

        Args:
            external_id: External identifier

        Returns:
            The line item if it exists, None otherwise
        """
        pass

    @abstractmethod
    def list_all(self, limit: int = 100) -> List[LineItem]:
        """
        List line items, most recent first.

        Args:
            limit: Maximum number of line items to return

        Returns:
            List of line items
        """
        pass

    @abstractmethod
    def total_price(self) -> Decimal:
        """
        Compute the monetary total over all line items.

        Returns:
            Sum of quantity times unit price, as a monetary amount
        """
        pass

    @abstractmethod
    def count(self) -> int:
        """
        Count stored line items.

        Returns:
            Number of line items
        """
        pass
