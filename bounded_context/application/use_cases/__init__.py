"""Application use cases."""
from bounded_context.application.use_cases.create_line_item_use_case import (
    CreateLineItemRequest,
    CreateLineItemUseCase,
)
from bounded_context.application.use_cases.get_line_item_use_case import GetLineItemUseCase

__all__ = [
    "CreateLineItemRequest",
    "CreateLineItemUseCase",
    "GetLineItemUseCase",
]
