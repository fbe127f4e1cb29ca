"""Line item domain entity."""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from bounded_context.domain.domain_object import Entity
from bounded_context.domain.entities.external_id import ExternalId
from bounded_context.domain.error_codes import ErrorCode
from bounded_context.domain.exceptions import NullValidationError, ValidationError
from bounded_context.domain.shared.monetary_amount import MonetaryAmount
from bounded_context.domain.shared.precision_markers import monetary_amount, unlimited_precision


@dataclass(eq=False)
class LineItem(Entity):
    """
    Domain entity representing a priced quantity of something.

    - ``quantity`` is a limited-precision decimal (4 decimal places).
    - ``unit_price`` is a monetary amount (2 decimal places).
    - ``exchange_rate`` deliberately keeps unlimited precision.

    The constructor validates against the current rules. Stored line items
    are restored through ``reconstitute`` and are not validated again.
    """

    MAX_DESCRIPTION_LENGTH = 200
    # Amounts must fit the 10 integer digits of the stored decimals
    MAX_AMOUNT = Decimal("1E+10")

    external_id: ExternalId
    description: str
    quantity: Decimal
    unit_price: Decimal = field(metadata=monetary_amount())
    exchange_rate: Decimal = field(default=Decimal(1), metadata=unlimited_precision())
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    id: Optional[int] = field(default=None, init=False)

    def __post_init__(self):
        """Validate line item entity."""
        if self.external_id is None:
            raise NullValidationError(ErrorCode.EXTERNAL_ID_VALUE_NULL, "LineItem external_id")
        if self.description is None:
            raise NullValidationError(ErrorCode.LINE_ITEM_DESCRIPTION_NULL, "LineItem description")
        if not isinstance(self.description, str):
            raise ValidationError(ErrorCode.LINE_ITEM_DESCRIPTION_INVALID, "A line item description must be text.")
        if not self.description.strip():
            raise ValidationError(ErrorCode.LINE_ITEM_DESCRIPTION_EMPTY, "A line item requires a description.")
        if len(self.description) > self.MAX_DESCRIPTION_LENGTH:
            raise ValidationError(
                ErrorCode.LINE_ITEM_DESCRIPTION_TOO_LONG,
                f"A line item description must not be longer than {self.MAX_DESCRIPTION_LENGTH} characters.",
            )
        if self.quantity is None:
            raise NullValidationError(ErrorCode.LINE_ITEM_QUANTITY_NULL, "LineItem quantity")
        if self.quantity <= 0:
            raise ValidationError(ErrorCode.LINE_ITEM_QUANTITY_NOT_POSITIVE, "A line item quantity must be positive.")
        if self.quantity >= self.MAX_AMOUNT:
            raise ValidationError(
                ErrorCode.LINE_ITEM_QUANTITY_TOO_LARGE, f"A line item quantity must be less than {self.MAX_AMOUNT:f}."
            )
        if self.unit_price is None:
            raise NullValidationError(ErrorCode.LINE_ITEM_UNIT_PRICE_NULL, "LineItem unit_price")
        if self.unit_price < 0:
            raise ValidationError(ErrorCode.LINE_ITEM_UNIT_PRICE_NEGATIVE, "A line item unit price must not be negative.")
        if self.unit_price >= self.MAX_AMOUNT:
            raise ValidationError(
                ErrorCode.LINE_ITEM_UNIT_PRICE_TOO_LARGE,
                f"A line item unit price must be less than {self.MAX_AMOUNT:f}.",
            )
        if self.exchange_rate is None:
            raise NullValidationError(ErrorCode.LINE_ITEM_EXCHANGE_RATE_NULL, "LineItem exchange_rate")
        if self.exchange_rate <= 0:
            raise ValidationError(
                ErrorCode.LINE_ITEM_EXCHANGE_RATE_NOT_POSITIVE, "A line item exchange rate must be positive."
            )
        if self.exchange_rate >= self.MAX_AMOUNT:
            raise ValidationError(
                ErrorCode.LINE_ITEM_EXCHANGE_RATE_TOO_LARGE,
                f"A line item exchange rate must be less than {self.MAX_AMOUNT:f}.",
            )

    @property
    def total_price(self) -> Decimal:
        """The monetary total, rounded half away from zero."""
        return MonetaryAmount.round(self.quantity * self.unit_price)

    def to_dict(self) -> dict:
        """Serialize for API responses; decimals as strings to keep their scale."""
        return {
            "id": self.id,
            "external_id": str(self.external_id),
            "description": self.description,
            "quantity": str(self.quantity),
            "unit_price": str(self.unit_price),
            "exchange_rate": str(self.exchange_rate),
            "total_price": str(self.total_price),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
