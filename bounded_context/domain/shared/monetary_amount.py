"""Decimals that store monetary amounts, such as 1.12."""
from decimal import Decimal, ROUND_HALF_UP
from typing import Tuple

from bounded_context.domain.shared.fixed_precision import DecimalLike, FixedPrecisionDecimal


class MonetaryAmount(FixedPrecisionDecimal):
    """
    Operations for decimal values intended to store monetary amounts, such as 1.12.

    Permits exactly 2 decimal places. Support for currencies with other
    numbers of decimal places (e.g. JPY(0), IQD(3)) is not implemented.
    """

    # Could go away if currencies with different decimal place counts are introduced, but it shows what relies on it
    DECIMAL_PLACES = 2

    @classmethod
    def round(cls, value: DecimalLike) -> Decimal:
        """
        Round to the number of decimal places of a monetary amount.

        Midpoint values (e.g. 1.005, -20.005) are rounded away from zero.
        """
        value = cls._to_decimal(value)
        with cls._exact_context(value):
            return value.quantize(Decimal(1).scaleb(-cls.DECIMAL_PLACES), rounding=ROUND_HALF_UP)

    @classmethod
    def round_with_excess(cls, value: DecimalLike) -> Tuple[Decimal, Decimal]:
        """
        Round to a monetary amount and also return the "lost" portion.

        Returns:
            Tuple of (rounded value, excess). The excess is positive when
            rounding down and negative when rounding up.
        """
        value = cls._to_decimal(value)
        result = cls.round(value)
        with cls._exact_context(value):
            excess = value - result
        return result, excess
