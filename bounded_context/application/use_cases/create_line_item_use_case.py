"""Use case for creating line items (Use Case Pattern)."""
import logging
from contextlib import AbstractContextManager
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable

from bounded_context.domain.entities.external_id import ExternalId
from bounded_context.domain.entities.line_item import LineItem
from bounded_context.domain.error_codes import ErrorCode
from bounded_context.domain.exceptions import ValidationError
from bounded_context.domain.interfaces.line_item_repository import ILineItemRepository
from bounded_context.domain.shared.limited_precision_decimal import LimitedPrecisionDecimal
from bounded_context.domain.shared.monetary_amount import MonetaryAmount

logger = logging.getLogger(__name__)

RepositoryScope = Callable[[], AbstractContextManager]


@dataclass
class CreateLineItemRequest:
    """Input for creating a line item, as received from the caller."""

    external_id: str
    description: str
    quantity: Decimal
    unit_price: Decimal
    exchange_rate: Decimal = Decimal(1)


class CreateLineItemUseCase:
    """
    Use case for creating and storing a new line item.

    Normalizes caller input before it reaches the entity: the quantity is
    truncated to a limited-precision decimal and the unit price is rounded to
    a monetary amount. Storage then only ever sees storable values.
    """

    def __init__(self, repository_scope: RepositoryScope):
        """
        Initialize use case with dependencies (Dependency Injection).

        Args:
            repository_scope: Callable returning a context manager that yields an
                ILineItemRepository within a unit of work
        """
        self.repository_scope = repository_scope

    def execute(self, request: CreateLineItemRequest) -> LineItem:
        """
        Execute the use case.

        Args:
            request: Line item input

        Returns:
            The stored line item

        Raises:
            ValidationError: If the input violates a domain rule
        """
        quantity, unit_price = request.quantity, request.unit_price
        # Missing values are left for the entity to reject
        if quantity is not None:
            quantity, superfluous_quantity = LimitedPrecisionDecimal.truncate_with_excess(quantity)
            if superfluous_quantity:
                logger.info(f"Truncated quantity {request.quantity} to {quantity}, dropping {superfluous_quantity}")
        if unit_price is not None:
            unit_price = MonetaryAmount.round(unit_price)

        line_item = LineItem(
            external_id=ExternalId(request.external_id),
            description=request.description,
            quantity=quantity,
            unit_price=unit_price,
            exchange_rate=request.exchange_rate,
        )

        with self.repository_scope() as repository:  # type: ILineItemRepository
            if repository.get_by_external_id(line_item.external_id) is not None:
                raise ValidationError(
                    ErrorCode.LINE_ITEM_EXTERNAL_ID_TAKEN,
                    f"A line item with external ID {line_item.external_id} already exists.",
                )
            repository.add(line_item)

        logger.info(f"Line item {line_item.external_id} created")
        return line_item
