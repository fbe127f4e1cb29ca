"""External identifier value object."""
import re
from dataclasses import dataclass
from typing import ClassVar

from bounded_context.domain.domain_object import WrapperValueObject
from bounded_context.domain.error_codes import ErrorCode
from bounded_context.domain.exceptions import NullValidationError, ValidationError


@dataclass(frozen=True)
class ExternalId(WrapperValueObject):
    """An identifier assigned by an external party, stored verbatim with a binary collation."""

    _value: str

    MAX_LENGTH: ClassVar[int] = 50
    _PATTERN: ClassVar = re.compile(r"[A-Za-z0-9_.-]+")

    def __post_init__(self):
        """Validate external id."""
        if self._value is None:
            raise NullValidationError(ErrorCode.EXTERNAL_ID_VALUE_NULL, "ExternalId value")
        if not isinstance(self._value, str):
            raise ValidationError(ErrorCode.EXTERNAL_ID_VALUE_INVALID, "An external ID must be a string.")
        if not self._value:
            raise ValidationError(ErrorCode.EXTERNAL_ID_VALUE_EMPTY, "An external ID must not be empty.")
        if len(self._value) > self.MAX_LENGTH:
            raise ValidationError(
                ErrorCode.EXTERNAL_ID_VALUE_TOO_LONG,
                f"An external ID must not be longer than {self.MAX_LENGTH} characters.",
            )
        if not self._PATTERN.fullmatch(self._value):
            raise ValidationError(
                ErrorCode.EXTERNAL_ID_VALUE_INVALID,
                "An external ID may only contain letters, digits, dots, dashes and underscores.",
            )

    @property
    def value(self) -> str:
        return self._value

    def __str__(self) -> str:
        return self._value
