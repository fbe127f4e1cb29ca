"""Repository implementations (Infrastructure Layer).

These implement domain interfaces defined in bounded_context.domain.interfaces.
"""
from bounded_context.infrastructure.repositories.line_item_repository import SqlAlchemyLineItemRepository

__all__ = [
    "SqlAlchemyLineItemRepository",
]
