"""Shared arithmetic for decimals with a fixed number of decimal places."""
from decimal import Decimal, MAX_EMAX, MIN_EMIN, ROUND_DOWN, getcontext, localcontext
from typing import ClassVar, Tuple, Union

from bounded_context.domain.exceptions import PrecisionViolationError

DecimalLike = Union[Decimal, int]


class FixedPrecisionDecimal:
    """
    Operations for decimal values intended to carry at most ``DECIMAL_PLACES`` decimal places.

    Subclasses only choose the number of decimal places. All operations are
    pure classmethods; nothing is ever instantiated.

    With ``value_or_too_precise``, a subclass helps verify that values have
    been properly truncated or rounded before they are sent to the database.
    Raising is much preferred over letting the database silently evaporate
    partial assets.
    """

    DECIMAL_PLACES: ClassVar[int] = 0

    @classmethod
    def value_or_too_precise(cls, value: DecimalLike) -> Decimal:
        """Return the given value, or raise if it has too much precision."""
        value = cls._to_decimal(value)
        if cls.is_too_precise(value):
            raise PrecisionViolationError(value, cls.__name__, cls.DECIMAL_PLACES)
        return value

    @classmethod
    def is_too_precise(cls, value: DecimalLike) -> bool:
        """Determine whether the value has more decimal places than the storable representation."""
        value = cls._to_decimal(value)
        return cls.truncate(value) != value

    @classmethod
    def truncate(cls, value: DecimalLike) -> Decimal:
        """
        Truncate superfluous decimal places, effectively rounding towards zero.

        The result always carries exactly ``DECIMAL_PLACES`` decimal places.

        Args:
            value: Decimal (or int) to truncate

        Returns:
            A value suitable for storage
        """
        value = cls._to_decimal(value)
        places = cls.DECIMAL_PLACES

        with cls._exact_context(value):
            # The result, but with the decimal places still multiplied to the left of the separator
            multiplied = value.scaleb(places).to_integral_value(rounding=ROUND_DOWN)

        # Rebuild with the intended scale; the sign comes from the input, not from the intermediate result
        _, digits, exponent = multiplied.as_tuple()
        if exponent > 0:
            digits += (0,) * exponent
        is_negative = value < 0
        return Decimal((1 if is_negative else 0, digits, -places))

    @classmethod
    def truncate_with_excess(cls, value: DecimalLike) -> Tuple[Decimal, Decimal]:
        """
        Truncate superfluous decimal places and also return the truncated portion.

        Returns:
            Tuple of (truncated value, excess). The excess is positive for
            positive inputs and negative for negative inputs.
        """
        value = cls._to_decimal(value)
        result = cls.truncate(value)
        with cls._exact_context(value):
            excess = value - result
        return result, excess

    @classmethod
    def get_superfluous_precision(cls, value: DecimalLike) -> Decimal:
        """Return the portion of the value considered superfluous precision."""
        return cls.truncate_with_excess(value)[1]

    @classmethod
    def _exact_context(cls, value: Decimal):
        # Enough significant digits and exponent range that scaling and subtracting stay exact
        sign, digits, exponent = value.as_tuple()
        context = getcontext().copy()
        context.prec = max(28, len(digits) + abs(exponent) + cls.DECIMAL_PLACES + 1)
        context.Emax = MAX_EMAX
        context.Emin = MIN_EMIN
        return localcontext(context)

    @staticmethod
    def _to_decimal(value: DecimalLike) -> Decimal:
        # bool is an int subclass, but never a meaningful amount
        if isinstance(value, bool) or not isinstance(value, (Decimal, int)):
            raise TypeError(f"Expected a Decimal, got {type(value).__name__}: {value!r}")
        value = Decimal(value)
        if not value.is_finite():
            raise ValueError(f"Expected a finite Decimal, got {value}")
        return value
