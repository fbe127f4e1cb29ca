"""Repository for line items using SQLAlchemy (Repository Pattern)."""
import logging
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import cast, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bounded_context.domain.entities.external_id import ExternalId
from bounded_context.domain.entities.line_item import LineItem
from bounded_context.domain.interfaces.line_item_repository import ILineItemRepository
from bounded_context.domain.shared.monetary_amount import MonetaryAmount
from bounded_context.infrastructure.databases.core_model import line_items_table
from bounded_context.infrastructure.databases.types import decimal_type


class SqlAlchemyLineItemRepository(ILineItemRepository):
    """
    Repository for line items stored in the core database.

    Works within the unit of work of the given session; committing is the
    caller's responsibility.
    """

    def __init__(self, session: Session):
        """
        Initialize the repository.

        Args:
            session: SQLAlchemy session (Dependency Injection)
        """
        self.session = session
        self._logger = logging.getLogger(__name__)

    def add(self, line_item: LineItem) -> LineItem:
        """Persist a new line item, flushing so that precision violations surface immediately."""
        try:
            self.session.add(line_item)
            self.session.flush()
        except SQLAlchemyError as e:
            self._logger.error(f"Error storing line item {line_item.external_id}: {e}")
            raise
        self._logger.info(f"Stored line item {line_item.external_id} with id {line_item.id}")
        return line_item

    def get_by_external_id(self, external_id: ExternalId) -> Optional[LineItem]:
        """Retrieve a line item by its external id."""
        statement = select(LineItem).where(line_items_table.c.external_id == external_id)
        line_item = self.session.execute(statement).scalar_one_or_none()
        if line_item is None:
            self._logger.debug(f"No line item found for {external_id}")
        return line_item

    def list_all(self, limit: int = 100) -> List[LineItem]:
        """List line items, most recent first."""
        statement = (
            select(LineItem)
            .order_by(line_items_table.c.created_at.desc(), line_items_table.c.id.desc())
            .limit(limit)
        )
        return list(self.session.execute(statement).scalars())

    def total_price(self) -> Decimal:
        """Compute the monetary total over all line items in the database."""
        subtotal = cast(line_items_table.c.quantity * line_items_table.c.unit_price, decimal_type())
        statement = select(func.coalesce(func.sum(subtotal), cast(0, decimal_type())))
        total = self.session.execute(statement).scalar_one()
        return MonetaryAmount.round(Decimal(total))

    def count(self) -> int:
        """Count stored line items."""
        return self.session.execute(select(func.count()).select_from(line_items_table)).scalar_one()
