"""Line item API endpoints."""
import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from flask import Blueprint, jsonify, request

from bounded_context.api.container import get_container
from bounded_context.application.use_cases.create_line_item_use_case import CreateLineItemRequest

line_items_blueprint = Blueprint("line_items", __name__)
_logger = logging.getLogger(__name__)

# Decimal exponents beyond this are out of range for any stored amount
MAX_DECIMAL_EXPONENT = 64


class InvalidDecimalError(ValueError):
    """A request field could not be read as a decimal."""


def _parse_decimal(body: dict, name: str, default: Optional[Decimal] = None) -> Optional[Decimal]:
    """
    Read a decimal request field.

    Decimals are expected as strings (e.g. "12.3456") so that no precision is
    lost in JSON. Integers are accepted as well; floats are not.
    """
    value: Any = body.get(name)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise InvalidDecimalError(f"'{name}' must be a decimal string, e.g. \"12.34\"")
    try:
        result = Decimal(value)
    except InvalidOperation:
        raise InvalidDecimalError(f"'{name}' is not a valid decimal: {value!r}")
    if not result.is_finite():
        raise InvalidDecimalError(f"'{name}' must be a finite decimal")
    if abs(result.as_tuple().exponent) > MAX_DECIMAL_EXPONENT:
        raise InvalidDecimalError(f"'{name}' is out of range: {value!r}")
    return result


@line_items_blueprint.route("/api/line-items", methods=["POST"])
def create_line_item():
    """
    Create a line item.

    Expected payload:
    {
        "external_id": "order-1-line-1",
        "description": "Widget",
        "quantity": "2.5",
        "unit_price": "9.99",
        "exchange_rate": "1.0837"  # optional
    }

    Quantities are truncated to 4 decimal places and unit prices rounded to
    2 decimal places before storage.

    Returns:
        JSON response with the stored line item
    """
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        return jsonify({"status": "error", "message": "JSON request body required"}), 400

    try:
        create_request = CreateLineItemRequest(
            external_id=body.get("external_id"),
            description=body.get("description"),
            quantity=_parse_decimal(body, "quantity"),
            unit_price=_parse_decimal(body, "unit_price"),
            exchange_rate=_parse_decimal(body, "exchange_rate", default=Decimal(1)),
        )
    except InvalidDecimalError as e:
        return jsonify({"status": "error", "message": str(e)}), 400

    line_item = get_container().get_create_line_item_use_case().execute(create_request)
    _logger.info(f"API created line item {line_item.external_id}")

    return jsonify({"status": "success", "line_item": line_item.to_dict()}), 201


@line_items_blueprint.route("/api/line-items/<external_id>", methods=["GET"])
def get_line_item(external_id: str):
    """
    Get a line item by its external id.

    Returns:
        JSON response with the line item, or 404
    """
    line_item = get_container().get_get_line_item_use_case().execute(external_id)
    if line_item is None:
        return jsonify({"status": "error", "message": f"Line item {external_id} not found"}), 404

    return jsonify({"status": "success", "line_item": line_item.to_dict()}), 200


@line_items_blueprint.route("/api/line-items", methods=["GET"])
def list_line_items():
    """
    List line items, most recent first.

    Query parameters:
        limit: Maximum number of line items (default 100, at most 500)
    """
    limit = request.args.get("limit", default=100, type=int)
    line_items = get_container().get_get_line_item_use_case().list(limit=limit)

    return jsonify({
        "status": "success",
        "count": len(line_items),
        "line_items": [line_item.to_dict() for line_item in line_items],
    }), 200
