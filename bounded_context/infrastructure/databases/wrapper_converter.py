"""Conversion between wrapper value objects and their primitives, without using constructors."""
from typing import Any, Optional

from sqlalchemy import Integer, String
from sqlalchemy.types import TypeDecorator

from bounded_context.domain.shared import reconstitution
from bounded_context.infrastructure.databases import collations


class WrapperConverter(TypeDecorator):
    """
    Converts between ``model_type`` and ``provider_type`` without using constructors.

    ``model_type`` must contain a single non-public instance field of type
    ``provider_type``, e.g. a frozen dataclass wrapping a string.

    Unlike constructing the wrapper from the stored primitive, this converter
    actively avoids the constructor: if a domain rule in the constructor
    changes while existing data is allowed to remain unchanged, the
    constructor might otherwise refuse to load such data.

    Raises:
        WrapperConfigurationError: When built for a type without exactly one matching field,
            i.e. at model-build time rather than on first data access
    """

    impl = String
    cache_ok = True

    def __init__(
        self,
        model_type: type,
        provider_type: type = str,
        length: Optional[int] = None,
        collation_kind: str = collations.BINARY,
    ):
        if provider_type not in (str, int):
            raise TypeError(f"Unsupported provider type for wrapping conversions: {provider_type.__name__}")
        self.model_type = model_type
        self.provider_type = provider_type
        self.length = length
        self.collation_kind = collations.ensure_kind(collation_kind)
        self.field_name = reconstitution.wrapped_field(model_type, provider_type)
        self._set_field = reconstitution.field_setter(model_type, self.field_name)
        super().__init__(length)

    @property
    def python_type(self) -> type:
        return self.model_type

    def load_dialect_impl(self, dialect):
        if self.provider_type is int:
            return dialect.type_descriptor(Integer())
        collation = collations.collation_for(dialect.name, self.collation_kind)
        return dialect.type_descriptor(String(self.length, collation=collation))

    def process_bind_param(self, value: Any, dialect) -> Any:
        if value is None:
            return None
        if not isinstance(value, self.model_type):
            raise TypeError(f"Expected {self.model_type.__name__}, got {type(value).__name__}: {value!r}")
        return object.__getattribute__(value, self.field_name)

    def process_result_value(self, value: Any, dialect) -> Any:
        if value is None:
            return None
        instance = reconstitution.allocate(self.model_type)
        self._set_field(instance, value)
        return instance
