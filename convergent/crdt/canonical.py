"""Process-independent encoding of CRDT elements.

``repr`` of a set or frozenset follows hash order, which changes with
``PYTHONHASHSEED``, so it cannot order snapshot entries or feed a digest
that two replicas compare. :func:`canonical` maps an element to tagged
JSON-compatible data whose text is the same in every process.

Stable for ``None``, ``bool``, ``int``, ``float``, ``str``, ``bytes``,
tuples, lists, sets, frozensets, dicts, enums, and dataclasses built from
those. Anything else falls back to its ``repr``, which is only as stable
as that ``repr``.
"""

from __future__ import annotations

import dataclasses
import json
from enum import Enum
from typing import Any


def _type_name(value: Any) -> str:
    cls = type(value)
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


def canonical(value: Any) -> list:
    """Encode a value as a ``[type_name, payload]`` pair of plain JSON data.

    Set members and dict items are sorted by their canonical text.
    """
    name = _type_name(value)
    if value is None or isinstance(value, (bool, int, float, str)):
        return [name, value]
    if isinstance(value, Enum):
        return [name, canonical(value.value)]
    if isinstance(value, (bytes, bytearray)):
        return [name, value.hex()]
    if isinstance(value, (tuple, list)):
        return [name, [canonical(item) for item in value]]
    if isinstance(value, (set, frozenset)):
        return [name, sorted((canonical(item) for item in value), key=_dumps)]
    if isinstance(value, dict):
        items = [[canonical(k), canonical(v)] for k, v in value.items()]
        return [name, sorted(items, key=_dumps)]
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return [
            name,
            [[f.name, canonical(getattr(value, f.name))] for f in dataclasses.fields(value)],
        ]
    return [name, repr(value)]


def _dumps(data: Any) -> str:
    return json.dumps(data, sort_keys=True)


def canonical_key(value: Any) -> str:
    """Sort key giving the same order for equal elements in every process."""
    return _dumps(canonical(value))
