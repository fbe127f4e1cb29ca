"""
Tests for domain entities, value objects, errors and enum helpers.
"""
from decimal import Decimal
from enum import Enum

import pytest

from bounded_context.domain.entities import ExternalId, LineItem
from bounded_context.domain.error_codes import ErrorCode
from bounded_context.domain.exceptions import (
    DeveloperError,
    NullValidationError,
    PrecisionViolationError,
    ValidationError,
    WrapperConfigurationError,
)
from bounded_context.domain.shared.enum_extensions import through, until


class Level(Enum):
    HIGH = 3
    LOW = 1
    MEDIUM = 2
    TOP = 4


class TestExternalId:

    def test_valid(self):
        external_id = ExternalId("order-1_line.2")
        assert external_id.value == "order-1_line.2"
        assert str(external_id) == "order-1_line.2"

    def test_equality_by_value(self):
        assert ExternalId("a") == ExternalId("a")
        assert hash(ExternalId("a")) == hash(ExternalId("a"))

    @pytest.mark.parametrize("value, error_code", [
        ("", ErrorCode.EXTERNAL_ID_VALUE_EMPTY),
        ("x" * 51, ErrorCode.EXTERNAL_ID_VALUE_TOO_LONG),
        ("with space", ErrorCode.EXTERNAL_ID_VALUE_INVALID),
        ("abc\n", ErrorCode.EXTERNAL_ID_VALUE_INVALID),
        ("\nabc", ErrorCode.EXTERNAL_ID_VALUE_INVALID),
        (12345, ErrorCode.EXTERNAL_ID_VALUE_INVALID),
    ])
    def test_invalid(self, value, error_code):
        with pytest.raises(ValidationError) as exc_info:
            ExternalId(value)
        assert exc_info.value.error_code is error_code

    def test_null(self):
        with pytest.raises(NullValidationError) as exc_info:
            ExternalId(None)
        assert exc_info.value.error_code is ErrorCode.EXTERNAL_ID_VALUE_NULL
        assert exc_info.value.message == "The following required data was missing: ExternalId value."


class TestLineItem:

    def make(self, **overrides):
        values = dict(
            external_id=ExternalId("line-1"),
            description="Widget",
            quantity=Decimal("2.5"),
            unit_price=Decimal("9.99"),
        )
        values.update(overrides)
        return LineItem(**values)

    def test_total_price_rounds_half_away_from_zero(self):
        line_item = self.make(quantity=Decimal("0.5"), unit_price=Decimal("0.01"))
        assert line_item.total_price == Decimal("0.01")

    def test_total_price(self):
        assert self.make().total_price == Decimal("24.98")

    def test_default_exchange_rate(self):
        assert self.make().exchange_rate == Decimal(1)

    def test_created_at_is_aware(self):
        assert self.make().created_at.tzinfo is not None

    @pytest.mark.parametrize("overrides, error_code", [
        ({"description": None}, ErrorCode.LINE_ITEM_DESCRIPTION_NULL),
        ({"description": "  "}, ErrorCode.LINE_ITEM_DESCRIPTION_EMPTY),
        ({"description": "x" * 201}, ErrorCode.LINE_ITEM_DESCRIPTION_TOO_LONG),
        ({"description": 7}, ErrorCode.LINE_ITEM_DESCRIPTION_INVALID),
        ({"quantity": None}, ErrorCode.LINE_ITEM_QUANTITY_NULL),
        ({"quantity": Decimal("0")}, ErrorCode.LINE_ITEM_QUANTITY_NOT_POSITIVE),
        ({"quantity": Decimal("1E+10")}, ErrorCode.LINE_ITEM_QUANTITY_TOO_LARGE),
        ({"unit_price": None}, ErrorCode.LINE_ITEM_UNIT_PRICE_NULL),
        ({"unit_price": Decimal("-0.01")}, ErrorCode.LINE_ITEM_UNIT_PRICE_NEGATIVE),
        ({"unit_price": Decimal("10000000000.00")}, ErrorCode.LINE_ITEM_UNIT_PRICE_TOO_LARGE),
        ({"exchange_rate": None}, ErrorCode.LINE_ITEM_EXCHANGE_RATE_NULL),
        ({"exchange_rate": Decimal("0")}, ErrorCode.LINE_ITEM_EXCHANGE_RATE_NOT_POSITIVE),
        ({"exchange_rate": Decimal("1E+5000")}, ErrorCode.LINE_ITEM_EXCHANGE_RATE_TOO_LARGE),
    ])
    def test_invalid(self, overrides, error_code):
        with pytest.raises(ValidationError) as exc_info:
            self.make(**overrides)
        assert exc_info.value.error_code is error_code

    def test_to_dict_keeps_decimal_scale(self):
        data = self.make(unit_price=Decimal("10.50")).to_dict()
        assert data["unit_price"] == "10.50"
        assert data["total_price"] == "26.25"
        assert data["external_id"] == "line-1"


class TestErrors:

    def test_validation_error_to_dict(self):
        error = ValidationError(ErrorCode.LINE_ITEM_QUANTITY_NOT_POSITIVE, "Nope.")
        assert error.to_dict() == {"error_code": "LineItem_QuantityNotPositive", "message": "Nope."}

    def test_null_validation_error_requires_parameter_name(self):
        with pytest.raises(TypeError):
            NullValidationError(ErrorCode.LINE_ITEM_QUANTITY_NULL, None)

    def test_developer_errors_are_not_validation_errors(self):
        assert issubclass(PrecisionViolationError, DeveloperError)
        assert issubclass(WrapperConfigurationError, DeveloperError)
        assert not issubclass(PrecisionViolationError, ValidationError)
        assert not issubclass(WrapperConfigurationError, ValidationError)

    def test_error_codes_are_unique(self):
        values = [code.value for code in ErrorCode]
        assert len(values) == len(set(values))


class TestEnumExtensions:

    def test_through_is_inclusive_and_ordered_by_value(self):
        assert list(through(Level.LOW, Level.HIGH)) == [Level.LOW, Level.MEDIUM, Level.HIGH]

    def test_until_is_exclusive(self):
        assert list(until(Level.MEDIUM, Level.TOP)) == [Level.MEDIUM, Level.HIGH]

    def test_empty_ranges(self):
        assert list(through(Level.HIGH, Level.LOW)) == []
        assert list(until(Level.LOW, Level.LOW)) == []
