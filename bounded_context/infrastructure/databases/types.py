"""Column types shared by the core database mapping."""
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Numeric, String
from sqlalchemy.types import TypeDecorator

from bounded_context.infrastructure.databases import collations

# Storage precision for (non-ID) decimals; fractional digits beyond a field's intended scale are rejected on write
DEFAULT_DECIMAL_PRECISION = 19
DEFAULT_DECIMAL_SCALE = 9


def decimal_type() -> Numeric:
    """The default column type for decimals, including CAST() and SUM() results."""
    return Numeric(DEFAULT_DECIMAL_PRECISION, DEFAULT_DECIMAL_SCALE, asdecimal=True)


class CollatedString(TypeDecorator):
    """A string column whose collation (binary or cultural) is resolved for the connected dialect."""

    impl = String
    cache_ok = True

    def __init__(self, length: Optional[int] = None, collation_kind: str = collations.DEFAULT):
        self.collation_kind = collations.ensure_kind(collation_kind)
        self.length = length
        super().__init__(length)

    def load_dialect_impl(self, dialect):
        collation = collations.collation_for(dialect.name, self.collation_kind)
        return dialect.type_descriptor(String(self.length, collation=collation))


class UtcDateTime(TypeDecorator):
    """
    Stores timezone-aware datetimes as naive UTC with millisecond precision.

    Values are loaded back as timezone-aware UTC datetimes.
    """

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            raise ValueError(f"Refusing to store a naive datetime, as its timezone is ambiguous: {value}")
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value.replace(microsecond=value.microsecond // 1000 * 1000)

    def process_result_value(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is None:
            return None
        return value.replace(tzinfo=timezone.utc)
