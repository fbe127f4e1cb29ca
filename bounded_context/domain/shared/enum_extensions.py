"""Helpers for walking ordered enum values."""
from enum import Enum
from functools import lru_cache
from typing import Iterator, Tuple, TypeVar

E = TypeVar("E", bound=Enum)


@lru_cache(maxsize=None)
def _sorted_values(enum_type: type) -> Tuple[Enum, ...]:
    return tuple(sorted(enum_type, key=lambda member: member.value))


def through(current_value: E, maximum_value: E) -> Iterator[E]:
    """
    Enumerate the members from ``current_value`` up to and including ``maximum_value``.

    Members are ordered by value, not by declaration.
    """
    for member in _sorted_values(type(current_value)):
        if member.value < current_value.value:
            continue
        if member.value > maximum_value.value:
            break
        yield member


def until(current_value: E, to_exclusive: E) -> Iterator[E]:
    """Enumerate the members from ``current_value`` up to (but excluding) ``to_exclusive``."""
    for member in _sorted_values(type(current_value)):
        if member.value < current_value.value:
            continue
        if member.value >= to_exclusive.value:
            break
        yield member
