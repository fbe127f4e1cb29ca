"""Stable error codes defined by this bounded context."""
from enum import Enum


class ErrorCode(str, Enum):
    """
    The stable error codes defined by this bounded context.

    Values are the stable codes exposed to callers.

    DO NOT DELETE OR RENAME ITEMS.
    """

    # DO NOT DELETE OR RENAME ITEMS

    EXTERNAL_ID_VALUE_NULL = "ExternalId_ValueNull"
    EXTERNAL_ID_VALUE_EMPTY = "ExternalId_ValueEmpty"
    EXTERNAL_ID_VALUE_TOO_LONG = "ExternalId_ValueTooLong"
    EXTERNAL_ID_VALUE_INVALID = "ExternalId_ValueInvalid"

    LINE_ITEM_DESCRIPTION_NULL = "LineItem_DescriptionNull"
    LINE_ITEM_DESCRIPTION_EMPTY = "LineItem_DescriptionEmpty"
    LINE_ITEM_DESCRIPTION_TOO_LONG = "LineItem_DescriptionTooLong"
    LINE_ITEM_QUANTITY_NULL = "LineItem_QuantityNull"
    LINE_ITEM_QUANTITY_NOT_POSITIVE = "LineItem_QuantityNotPositive"
    LINE_ITEM_UNIT_PRICE_NULL = "LineItem_UnitPriceNull"
    LINE_ITEM_UNIT_PRICE_NEGATIVE = "LineItem_UnitPriceNegative"
    LINE_ITEM_EXCHANGE_RATE_NULL = "LineItem_ExchangeRateNull"
    LINE_ITEM_EXCHANGE_RATE_NOT_POSITIVE = "LineItem_ExchangeRateNotPositive"
    LINE_ITEM_EXTERNAL_ID_TAKEN = "LineItem_ExternalIdTaken"
    LINE_ITEM_DESCRIPTION_INVALID = "LineItem_DescriptionInvalid"
    LINE_ITEM_QUANTITY_TOO_LARGE = "LineItem_QuantityTooLarge"
    LINE_ITEM_UNIT_PRICE_TOO_LARGE = "LineItem_UnitPriceTooLarge"
    LINE_ITEM_EXCHANGE_RATE_TOO_LARGE = "LineItem_ExchangeRateTooLarge"

    # DO NOT DELETE OR RENAME ITEMS
