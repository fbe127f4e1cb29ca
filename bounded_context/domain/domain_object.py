"""Base types for domain objects."""
from typing import Any

from bounded_context.domain.shared import reconstitution


class DomainObject:
    """
    Base type for entities and value objects.

    Every domain object has two construction entry points:

    - its regular constructor, which validates against the current rules;
    - ``reconstitute``, reserved for the storage layer, which restores
      previously persisted state without validating it again.
    """

    __slots__ = ()

    @classmethod
    def reconstitute(cls, **state: Any):
        """Restore an instance from stored field values without running the constructor."""
        return reconstitution.reconstitute(cls, state)


class Entity(DomainObject):
    """A domain object with an identity of its own."""

    __slots__ = ()


class ValueObject(DomainObject):
    """A domain object defined purely by its values."""

    __slots__ = ()


class WrapperValueObject(ValueObject):
    """
    A value object wrapping a single primitive value.

    Subclasses declare exactly one non-public field holding the primitive,
    which lets the storage layer convert without using constructors.
    """

    __slots__ = ()
