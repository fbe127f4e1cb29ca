"""Decimals with a notable but limited precision."""
from bounded_context.domain.shared.fixed_precision import FixedPrecisionDecimal


class LimitedPrecisionDecimal(FixedPrecisionDecimal):
    """
    Operations for decimal values intended to have a notable but limited precision.

    For example, this can be used to persist security sizes, or monetary
    values not yet rounded to cents.

    Every ``Decimal`` column with the default storage precision is guarded
    with ``value_or_too_precise`` unless it is marked with
    ``unlimited_precision()`` or ``monetary_amount()``.
    """

    DECIMAL_PLACES = 4
