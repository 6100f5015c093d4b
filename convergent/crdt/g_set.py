"""Grow-only set (G-Set) CRDT.

Elements can be added but never removed. The partial order is set
inclusion and merge is set union.

Example::

    a = GrowOnlySet.create([1, 2])
    b = GrowOnlySet.create([2, 3])

    assert not a.compare(b)
    a.merge(b)
    assert a.elements == frozenset({1, 2, 3})
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Self

from convergent.crdt.canonical import canonical_key
from convergent.crdt.validation import (
    require_hashable,
    require_iterable,
    require_kind,
    require_snapshot,
)
from convergent.errors import InvalidArgumentError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

logger = logging.getLogger(__name__)


class GrowOnlySet:
    """Grow-only set CRDT.

    Holds unique hashable elements. Membership is by value, so structured
    elements such as tuples or frozen dataclasses compare by content.
    """

    __slots__ = ("_elements",)

    def __init__(self):
        self._elements: set[Any] = set()

    @classmethod
    def create(cls, elements: Iterable[Any]) -> Self:
        """Create a set from an initial collection (duplicates collapse).

        Raises:
            InvalidArgumentError: If elements is not iterable or holds an
                unhashable element.
        """
        require_iterable(elements, "elements")
        s = cls()
        for element in elements:
            s._elements.add(require_hashable(element))
        return s

    @property
    def value(self) -> frozenset:
        """Current elements (alias for ``elements``)."""
        return self.elements

    @property
    def elements(self) -> frozenset:
        return frozenset(self._elements)

    def add(self, element: Any) -> None:
        """Add an element. Adding a present element is a no-op.

        Args:
            element: The (hashable) element to add.
        """
        self._elements.add(require_hashable(element))

    def lookup(self, element: Any) -> bool:
        """Check if an element is in the set."""
        try:
            return element in self._elements
        except TypeError:
            return False

    def compare(self, other: GrowOnlySet) -> bool:
        """Return True if every element of this set is in ``other``.

        Raises:
            InvalidArgumentError: If other is not a GrowOnlySet.
        """
        require_kind(other, GrowOnlySet, "a grow-only set")
        return self._elements <= other._elements

    def merge(self, other: GrowOnlySet) -> Self:
        """Merge another set into this one (union).

        Args:
            other: Set to merge from. It is not modified.

        Returns:
            This set.

        Raises:
            InvalidArgumentError: If other is not a GrowOnlySet.
        """
        require_kind(other, GrowOnlySet, "a grow-only set")
        added = len(other._elements - self._elements)
        self._elements |= other._elements
        logger.debug("Merged grow-only set: %d new elements, %d total", added, len(self._elements))
        return self

    def copy(self) -> Self:
        """Return an independent replica with the same elements."""
        return type(self).create(self._elements)

    def to_dict(self) -> dict:
        """Serialize to a plain dict (elements in canonical order)."""
        return {
            "type": "GrowOnlySet",
            "elements": sorted(self._elements, key=canonical_key),
        }

    @classmethod
    def from_dict(cls, data: dict) -> Self:
        """Deserialize from a plain dict.

        Args:
            data: Dict produced by ``to_dict()``.

        Raises:
            InvalidArgumentError: If the snapshot is malformed.
        """
        require_snapshot(data, "GrowOnlySet", ("elements",))
        elements = data["elements"]
        if not isinstance(elements, (list, tuple, set, frozenset)):
            raise InvalidArgumentError(
                f"elements should be a list, got {type(elements).__name__}"
            )
        return cls.create(elements)

    def __contains__(self, element: Any) -> bool:
        return self.lookup(element)

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._elements)

    def __repr__(self) -> str:
        return f"GrowOnlySet(elements={self.elements!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GrowOnlySet):
            return NotImplemented
        return self._elements == other._elements
