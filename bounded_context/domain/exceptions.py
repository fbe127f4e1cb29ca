"""Domain exceptions.

Two families exist:

- ``ValidationError`` and its subclasses represent bad input and map to a
  client error at the HTTP edge.
- ``DeveloperError`` and its subclasses represent logic defects (e.g. an
  over-precise value reaching the write path, or an inconsistent storage
  mapping). They are never translated into a 4xx and are never retried.
"""
from enum import Enum
from typing import Optional


class ValidationError(Exception):
    """A domain rule rejected the given input."""

    def __init__(self, error_code: Enum, message: str):
        super().__init__(message)
        self.error_code = error_code
        self.message = message

    def to_dict(self) -> dict:
        """Serialize for API responses."""
        return {
            "error_code": self.error_code.value if isinstance(self.error_code, Enum) else str(self.error_code),
            "message": self.message,
        }


class NullValidationError(ValidationError):
    """Similar to a missing-argument error, except in the form of a ValidationError."""

    def __init__(self, error_code: Enum, parameter_name: str, message: Optional[str] = None):
        if parameter_name is None:
            raise TypeError("parameter_name is required")
        super().__init__(
            error_code,
            message or f"The following required data was missing: {parameter_name}.",
        )
        self.parameter_name = parameter_name


class DeveloperError(Exception):
    """Base class for errors that indicate a programming defect rather than bad input."""


class PrecisionViolationError(DeveloperError, ArithmeticError):
    """An over-precise decimal value was about to be persisted."""

    def __init__(self, value, type_name: str, decimal_places: int, message: Optional[str] = None):
        super().__init__(
            message
            or f"Developer error: Forgot to truncate/distribute superfluous precision in the appropriate place "
               f"before converting a decimal value to an actual, storable {type_name} "
               f"({decimal_places} decimal places): {value}."
        )
        self.value = value
        self.type_name = type_name
        self.decimal_places = decimal_places


class WrapperConfigurationError(DeveloperError, TypeError):
    """A type cannot be used as a wrapper value object for storage conversions."""
