"""Domain entities - core business objects."""
from bounded_context.domain.entities.external_id import ExternalId
from bounded_context.domain.entities.line_item import LineItem

__all__ = [
    "ExternalId",
    "LineItem",
]
