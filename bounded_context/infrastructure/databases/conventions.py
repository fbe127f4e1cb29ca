"""Precision conventions, applied once when the storage model is finalized.

The model-build step assembles a list of (property, normalizer) pairs from
the mapped tables and the markers declared on the domain dataclasses. Each
write then only runs the precomputed guards.
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence, Type

from sqlalchemy import event, inspect
from sqlalchemy.orm import Mapper

from bounded_context.domain.exceptions import DeveloperError
from bounded_context.domain.shared.fixed_precision import FixedPrecisionDecimal
from bounded_context.domain.shared.limited_precision_decimal import LimitedPrecisionDecimal
from bounded_context.domain.shared.monetary_amount import MonetaryAmount
from bounded_context.domain.shared.precision_markers import PrecisionMarker, declared_markers
from bounded_context.infrastructure.databases.types import DEFAULT_DECIMAL_PRECISION

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PersistablePropertyDescriptor:
    """Metadata about a mapped field destined for storage, built once at model-build time."""

    entity_type: type
    name: str
    python_type: Optional[type]
    precision: Optional[int]
    scale: Optional[int]
    marker: Optional[PrecisionMarker] = None

    @property
    def qualified_name(self) -> str:
        return f"{self.entity_type.__name__}.{self.name}"


@dataclass(frozen=True)
class PrecisionGuard:
    """Rejects writes of a property whose value is more precise than its normalizer permits."""

    descriptor: PersistablePropertyDescriptor
    normalizer: Type[FixedPrecisionDecimal]

    def check(self, target) -> None:
        """
        Raises:
            PrecisionViolationError: If the target's value is too precise
        """
        value = getattr(target, self.descriptor.name)
        if value is not None:
            self.normalizer.value_or_too_precise(value)


class PrecisionConvention(ABC):
    """Selects the properties that a fixed-precision normalizer guards."""

    normalizer: Type[FixedPrecisionDecimal]

    @abstractmethod
    def applies_to(self, descriptor: PersistablePropertyDescriptor) -> bool:
        pass


class LimitedPrecisionDecimalConvention(PrecisionConvention):
    """Unless a property is marked, a default-precision decimal must not be rounded by the database."""

    normalizer = LimitedPrecisionDecimal

    def applies_to(self, descriptor: PersistablePropertyDescriptor) -> bool:
        return (
            descriptor.python_type is Decimal
            and descriptor.precision == DEFAULT_DECIMAL_PRECISION
            and descriptor.marker is None
        )


class MonetaryAmountConvention(PrecisionConvention):
    """A property marked as a monetary amount must not carry subcent precision."""

    normalizer = MonetaryAmount

    def applies_to(self, descriptor: PersistablePropertyDescriptor) -> bool:
        if descriptor.marker is not PrecisionMarker.MONETARY_AMOUNT:
            return False
        if descriptor.python_type is not Decimal:
            raise DeveloperError(
                f"{descriptor.qualified_name} is marked as a monetary amount, but is not mapped as a Decimal."
            )
        return True


DEFAULT_CONVENTIONS: Sequence[PrecisionConvention] = (
    LimitedPrecisionDecimalConvention(),
    MonetaryAmountConvention(),
)


def describe_properties(mapper: Mapper) -> List[PersistablePropertyDescriptor]:
    """Describe every column-mapped property of the mapper's class."""
    markers = declared_markers(mapper.class_)
    descriptors = []
    for prop in mapper.column_attrs:
        column_type = prop.columns[0].type
        descriptors.append(PersistablePropertyDescriptor(
            entity_type=mapper.class_,
            name=prop.key,
            python_type=_python_type(column_type),
            precision=getattr(column_type, "precision", None),
            scale=getattr(column_type, "scale", None),
            marker=markers.get(prop.key),
        ))
    return descriptors


def build_precision_guards(
    descriptors: Iterable[PersistablePropertyDescriptor],
    conventions: Sequence[PrecisionConvention] = DEFAULT_CONVENTIONS,
) -> List[PrecisionGuard]:
    """
    Pair each descriptor with the normalizer of the last convention that applies to it.

    Returns:
        Guards in property order
    """
    guards = []
    for descriptor in descriptors:
        normalizer = None
        for convention in conventions:
            if convention.applies_to(descriptor):
                normalizer = convention.normalizer
        if normalizer is not None:
            guards.append(PrecisionGuard(descriptor, normalizer))
    return guards


def apply_precision_conventions(
    mapper: Mapper,
    conventions: Sequence[PrecisionConvention] = DEFAULT_CONVENTIONS,
) -> List[PrecisionGuard]:
    """
    Attach precision guards to every insert and update of the mapper's class.

    An over-precise value aborts the flush with a PrecisionViolationError.
    Updates only check the properties they change, so a stored row whose
    values predate the guards can still have its other fields updated.

    Args:
        mapper: Mapper of a domain type
        conventions: Conventions to apply, later ones taking precedence

    Returns:
        The attached guards
    """
    guards = build_precision_guards(describe_properties(mapper), conventions)
    if not guards:
        return guards

    def enforce_precision(mapper_, connection, target):
        for guard in guards:
            guard.check(target)

    def enforce_changed_precision(mapper_, connection, target):
        # Stored values are not checked again unless they are being changed
        state = inspect(target)
        for guard in guards:
            if state.attrs[guard.descriptor.name].history.has_changes():
                guard.check(target)

    event.listen(mapper, "before_insert", enforce_precision)
    event.listen(mapper, "before_update", enforce_changed_precision)

    logger.debug(
        f"Precision guards for {mapper.class_.__name__}: "
        f"{', '.join(f'{g.descriptor.name}={g.normalizer.__name__}' for g in guards)}"
    )
    return guards


def _python_type(column_type) -> Optional[type]:
    try:
        return column_type.python_type
    except NotImplementedError:
        return None
