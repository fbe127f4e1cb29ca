"""Markers for decimal fields, declared through dataclass field metadata."""
import dataclasses
from enum import Enum
from typing import Any, Dict, Optional

PRECISION_MARKER_KEY = "precision_marker"


class PrecisionMarker(str, Enum):
    """Declares which precision rule a persisted decimal field follows."""

    # Stores a monetary amount, such as 1.12 (see MonetaryAmount)
    MONETARY_AMOUNT = "monetary_amount"

    # Opts out of requiring rounding or truncation before being persisted.
    # Beware: values are then implicitly rounded or truncated by the storage engine
    # at its native precision, while the in-memory value keeps its full precision.
    UNLIMITED_PRECISION = "unlimited_precision"


def monetary_amount(**metadata: Any) -> Dict[str, Any]:
    """Field metadata marking a Decimal field as a monetary amount (2 decimal places)."""
    return {**metadata, PRECISION_MARKER_KEY: PrecisionMarker.MONETARY_AMOUNT}


def unlimited_precision(**metadata: Any) -> Dict[str, Any]:
    """
    Field metadata marking a Decimal field as not requiring rounding or truncation before being persisted.

    A field *without* a marker raises if it is stored with too much precision.
    """
    return {**metadata, PRECISION_MARKER_KEY: PrecisionMarker.UNLIMITED_PRECISION}


def declared_markers(cls: type) -> Dict[str, PrecisionMarker]:
    """Return the precision markers declared on the fields of a dataclass, by field name."""
    if not dataclasses.is_dataclass(cls):
        return {}
    markers = {}
    for field in dataclasses.fields(cls):
        marker: Optional[PrecisionMarker] = field.metadata.get(PRECISION_MARKER_KEY)
        if marker is not None:
            markers[field.name] = marker
    return markers
