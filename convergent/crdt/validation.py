"""Argument checks shared by the CRDT implementations.

Each helper raises :class:`~convergent.errors.InvalidArgumentError` with a
readable message and otherwise returns its (validated) argument, so callers
can validate inline before touching any state.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Mapping
from typing import Any

from convergent.errors import InvalidArgumentError


def is_integer(value: Any) -> bool:
    """True for ``int`` values, excluding ``bool``."""
    return isinstance(value, int) and not isinstance(value, bool)


def require_integer(value: Any, name: str = "argument") -> int:
    """Require an ``int`` (``bool`` is rejected)."""
    if not is_integer(value):
        raise InvalidArgumentError(f"{name} should be an integer, got {value!r}")
    return value


def require_positive(value: Any, name: str = "argument") -> int:
    """Require a strictly positive integer.

    Args:
        value: The value to check.
        name: Name used in the error message.

    Returns:
        The value, unchanged.

    Raises:
        InvalidArgumentError: If value is not an int or is <= 0.
    """
    require_integer(value, name)
    if value <= 0:
        raise InvalidArgumentError(f"{name} should be positive, got {value}")
    return value


def require_non_negative(value: Any, name: str = "argument") -> int:
    """Require an integer >= 0."""
    require_integer(value, name)
    if value < 0:
        raise InvalidArgumentError(f"{name} should be non-negative, got {value}")
    return value


def require_hashable(value: Any, name: str = "element") -> Any:
    """Require a value usable as a set member or dict key."""
    if not isinstance(value, Hashable):
        raise InvalidArgumentError(f"{name} should be hashable, got {type(value).__name__}")
    try:
        hash(value)
    except TypeError as e:
        raise InvalidArgumentError(f"{name} should be hashable: {e}") from e
    return value


def require_iterable(value: Any, name: str = "argument") -> Iterable:
    """Require an iterable collection to build a CRDT from."""
    if not isinstance(value, Iterable):
        raise InvalidArgumentError(f"{name} should be iterable, got {type(value).__name__}")
    return value


def require_mapping(value: Any, name: str = "argument") -> Mapping:
    """Require a mapping of element -> timestamp."""
    if not isinstance(value, Mapping):
        raise InvalidArgumentError(f"{name} should be a mapping, got {type(value).__name__}")
    return value


def require_kind(other: Any, cls: type, description: str) -> None:
    """Require ``other`` to be an instance of ``cls``.

    Args:
        other: The operand handed to ``compare`` or ``merge``.
        cls: The expected CRDT class.
        description: Phrase for the error message, e.g. "a grow-only set".
    """
    if not isinstance(other, cls):
        raise InvalidArgumentError(
            f"argument should be {description}, got {type(other).__name__}"
        )


def require_snapshot(data: Any, type_name: str, keys: tuple[str, ...]) -> dict:
    """Check the envelope of a dict produced by ``to_dict()``.

    Args:
        data: The candidate snapshot.
        type_name: Expected value of the ``"type"`` field.
        keys: Keys that must be present besides ``"type"``.

    Returns:
        The snapshot dict.

    Raises:
        InvalidArgumentError: If data is not a dict, is tagged with another
            type, or lacks a required key.
    """
    if not isinstance(data, dict):
        raise InvalidArgumentError(f"snapshot should be a dict, got {type(data).__name__}")
    if data.get("type") != type_name:
        raise InvalidArgumentError(
            f"snapshot type should be {type_name!r}, got {data.get('type')!r}"
        )
    missing = [key for key in keys if key not in data]
    if missing:
        raise InvalidArgumentError(f"snapshot is missing keys: {', '.join(missing)}")
    return data
