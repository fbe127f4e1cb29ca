"""Shared domain building blocks."""
from bounded_context.domain.shared.fixed_precision import FixedPrecisionDecimal
from bounded_context.domain.shared.limited_precision_decimal import LimitedPrecisionDecimal
from bounded_context.domain.shared.monetary_amount import MonetaryAmount
from bounded_context.domain.shared.precision_markers import (
    PrecisionMarker,
    monetary_amount,
    unlimited_precision,
)

__all__ = [
    "FixedPrecisionDecimal",
    "LimitedPrecisionDecimal",
    "MonetaryAmount",
    "PrecisionMarker",
    "monetary_amount",
    "unlimited_precision",
]
