"""Reconstitution of domain objects from stored state, bypassing their validating constructors.

Constructors enforce the *current* validation rules. Stored data may have
been valid under older rules, so the storage layer must be able to load it
without re-validating. This module is the only place that creates domain
objects that way.
"""
import dataclasses
import threading
import typing
from typing import Any, Callable, Dict, Mapping, Tuple

from bounded_context.domain.exceptions import WrapperConfigurationError

FieldSetter = Callable[[Any, Any], None]

_allocators: Dict[type, Callable[[], Any]] = {}
_field_setters: Dict[Tuple[type, str], FieldSetter] = {}
_lock = threading.Lock()


def register_allocator(cls: type, allocator: Callable[[], Any]) -> None:
    """
    Register how to allocate an uninitialized instance of ``cls``.

    Mapped classes need this, because the ORM must attach its instance state.
    Other classes are allocated with ``cls.__new__(cls)``.
    """
    with _lock:
        _allocators[cls] = allocator


def allocate(cls: type) -> Any:
    """Create an uninitialized instance of ``cls`` without running ``__init__`` or ``__post_init__``."""
    allocator = _allocators.get(cls)
    if allocator is not None:
        return allocator()
    return cls.__new__(cls)


def field_setter(cls: type, name: str) -> FieldSetter:
    """
    Return a cached function that writes field ``name`` on instances of ``cls``.

    The setter also writes to frozen dataclasses and ``__slots__`` classes,
    mutating the given instance itself rather than a copy.
    """
    key = (cls, name)
    setter = _field_setters.get(key)
    if setter is not None:
        return setter

    with _lock:
        setter = _field_setters.get(key)
        if setter is None:
            if name not in _assignable_names(cls):
                raise AttributeError(f"{cls.__name__} has no field named {name}")

            def setter(instance: Any, value: Any) -> None:
                object.__setattr__(instance, name, value)

            setter.__name__ = f"set_{cls.__name__}_{name}"
            _field_setters[key] = setter
    return setter


def reconstitute(cls: type, state: Mapping[str, Any]) -> Any:
    """
    Create an instance of ``cls`` purely from stored field values.

    Args:
        cls: Domain type to instantiate
        state: Field values by field name

    Returns:
        The instance, with no constructor logic having run
    """
    instance = allocate(cls)
    for name, value in state.items():
        field_setter(cls, name)(instance, value)
    return instance


def wrapped_field(model_type: type, provider_type: type) -> str:
    """
    Return the name of the single non-public instance field of ``model_type`` typed as ``provider_type``.

    Raises:
        WrapperConfigurationError: If there is not exactly one such field
    """
    try:
        hints = typing.get_type_hints(model_type)
    except (NameError, TypeError) as e:
        raise WrapperConfigurationError(
            f"Type {model_type.__name__} cannot be used for wrapping conversions: its annotations cannot be resolved ({e})."
        ) from e

    candidates = [
        name for name, hint in hints.items()
        if _is_non_public(name) and hint is provider_type
    ]
    if len(candidates) != 1:
        raise WrapperConfigurationError(
            f"Type {model_type.__name__} cannot be used for wrapping conversions, because it does not have "
            f"exactly 1 (non-public) instance field of type {provider_type.__name__}."
        )
    return candidates[0]


def _is_non_public(name: str) -> bool:
    return name.startswith("_") and not name.startswith("__")


def _assignable_names(cls: type) -> set:
    names = set()
    if dataclasses.is_dataclass(cls):
        names.update(field.name for field in dataclasses.fields(cls))
    for klass in cls.__mro__:
        slots = klass.__dict__.get("__slots__", ())
        names.update((slots,) if isinstance(slots, str) else slots)
        names.update(klass.__dict__.get("__annotations__", {}))
    return names
