"""Last-Writer-Wins Element Set (LWW-Element-Set) CRDT.

The set keeps two maps from element to logical timestamp: one for adds
and one for removes. Each map only ever keeps the largest timestamp seen
for an element, and merge takes the per-key maximum of each map
independently. Presence is never stored; it is derived on every lookup
from the latest add time, the latest remove time, and the set's ``Bias``,
which decides equal timestamps.

Example::

    s = LWWElementSet()
    s.add("apple", 1)
    s.remove("apple", 2)
    assert not s.lookup("apple")

    s.add("apple", 3)
    assert s.lookup("apple")

Bias is local configuration and is not merged. Two replicas whose maps
have converged but whose biases differ will disagree on elements with
equal add and remove timestamps.
"""

from __future__ import annotations

import logging
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Self

from convergent.crdt.canonical import canonical_key
from convergent.crdt.validation import (
    require_hashable,
    require_kind,
    require_mapping,
    require_positive,
    require_snapshot,
)
from convergent.errors import InvalidArgumentError

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

logger = logging.getLogger(__name__)


class Bias(Enum):
    """Tie-break policy for equal add and remove timestamps."""

    ADD_WINS = "add-wins"
    REMOVAL_WINS = "removal-wins"

    @property
    def offset(self) -> int:
        """Amount added to the remove time before comparing with the add time."""
        return -1 if self is Bias.ADD_WINS else 0


def _merge_timestamps(mine: dict[Any, int], theirs: Mapping[Any, int]) -> int:
    """Fold ``theirs`` into ``mine`` keeping the max per key.

    Returns:
        Number of keys whose timestamp changed.
    """
    changed = 0
    for element, timestamp in theirs.items():
        if element not in mine or mine[element] < timestamp:
            mine[element] = timestamp
            changed += 1
    return changed


def _checked_timestamps(entries: Mapping[Any, Any], name: str) -> dict[Any, int]:
    require_mapping(entries, f"{name} map")
    checked: dict[Any, int] = {}
    for element, timestamp in entries.items():
        require_positive(timestamp, f"{name} timestamp for {element!r}")
        checked[element] = timestamp
    return checked


def _encode_timestamps(entries: dict[Any, int]) -> list[list[Any]]:
    return [[element, entries[element]] for element in sorted(entries, key=canonical_key)]


def _decode_timestamps(pairs: Any, name: str) -> dict[Any, int]:
    if not isinstance(pairs, (list, tuple)):
        raise InvalidArgumentError(f"{name} should be a list of pairs, got {type(pairs).__name__}")
    decoded: dict[Any, int] = {}
    for pair in pairs:
        if not isinstance(pair, (list, tuple)) or len(pair) != 2:
            raise InvalidArgumentError(f"{name} entry should be an [element, timestamp] pair, got {pair!r}")
        element, timestamp = pair
        require_hashable(element, f"{name} element")
        require_positive(timestamp, f"{name} timestamp for {element!r}")
        decoded[element] = max(decoded.get(element, -1), timestamp)
    return decoded


class LWWElementSet:
    """Last-Writer-Wins Element Set CRDT.

    An element is present iff it has an add timestamp and either no
    remove timestamp or an add timestamp later than its remove
    timestamp. Equal timestamps resolve to present under
    ``Bias.ADD_WINS`` and to absent under ``Bias.REMOVAL_WINS``.

    Timestamps are positive integers supplied by the caller; their
    ordering across replicas (synchronized or logical clocks) is the
    caller's responsibility.

    Args:
        bias: Tie-break policy, fixed for the lifetime of the set.

    Raises:
        InvalidArgumentError: If bias is not a ``Bias``.
    """

    __slots__ = ("_adds", "_bias", "_removes")

    def __init__(self, bias: Bias = Bias.ADD_WINS):
        if not isinstance(bias, Bias):
            raise InvalidArgumentError(f"bias should be a Bias, got {bias!r}")
        self._bias = bias
        self._adds: dict[Any, int] = {}
        self._removes: dict[Any, int] = {}

    @classmethod
    def create(
        cls,
        add_map: Mapping[Any, int],
        remove_map: Mapping[Any, int],
        bias: Bias = Bias.ADD_WINS,
    ) -> Self:
        """Create a set from explicit add and remove maps.

        The maps are copied; later changes to them do not affect the set.

        Args:
            add_map: Element -> latest add timestamp.
            remove_map: Element -> latest remove timestamp.
            bias: Tie-break policy.

        Raises:
            InvalidArgumentError: If a map is not a mapping or a timestamp
                is not a positive integer.
        """
        s = cls(bias)
        s._adds = _checked_timestamps(add_map, "add")
        s._removes = _checked_timestamps(remove_map, "remove")
        return s

    @property
    def bias(self) -> Bias:
        """Tie-break policy of this replica."""
        return self._bias

    @property
    def add_map(self) -> Mapping[Any, int]:
        """Read-only view of element -> latest add timestamp."""
        return MappingProxyType(self._adds)

    @property
    def remove_map(self) -> Mapping[Any, int]:
        """Read-only view of element -> latest remove timestamp."""
        return MappingProxyType(self._removes)

    @property
    def value(self) -> frozenset:
        """Currently present elements (alias for ``elements``)."""
        return self.elements

    @property
    def elements(self) -> frozenset:
        return frozenset(e for e in self._adds if self.lookup(e))

    def add(self, element: Any, timestamp: int) -> None:
        """Record an add of ``element`` at ``timestamp``.

        An older timestamp never replaces a newer one.

        Args:
            element: The (hashable) element to add.
            timestamp: Positive integer logical time of the add.

        Raises:
            InvalidArgumentError: If timestamp is not a positive integer.
        """
        require_positive(timestamp, "timestamp")
        require_hashable(element)
        self._adds[element] = max(self._adds.get(element, -1), timestamp)

    def remove(self, element: Any, timestamp: int) -> None:
        """Record a remove of ``element`` at ``timestamp``.

        The element need not have been added; the remove is kept and
        shadows any add with an earlier timestamp.

        Raises:
            InvalidArgumentError: If timestamp is not a positive integer.
        """
        require_positive(timestamp, "timestamp")
        require_hashable(element)
        self._removes[element] = max(self._removes.get(element, -1), timestamp)

    def lookup(self, element: Any) -> bool:
        """Check if an element is currently present.

        Args:
            element: The element to check.

        Returns:
            True if the element's latest add beats its latest remove
            under this set's bias.
        """
        try:
            if element not in self._adds:
                return False
        except TypeError:
            return False
        if element not in self._removes:
            return True
        return self._adds[element] > self._removes[element] + self._bias.offset

    def compare(self, other: LWWElementSet) -> bool:
        """Return True if every element present here is present in ``other``.

        Presence on each side is judged with that side's own bias.
        Elements absent here impose no constraint.

        Raises:
            InvalidArgumentError: If other is not an LWWElementSet.
        """
        require_kind(other, LWWElementSet, "a LWW element set")
        return all(other.lookup(e) for e in self._adds if self.lookup(e))

    def merge(self, other: LWWElementSet) -> Self:
        """Merge another set into this one.

        The add maps and remove maps are joined independently, keeping
        the max timestamp per element. This replica keeps its own bias.

        Args:
            other: Set to merge from. It is not modified.

        Returns:
            This set.

        Raises:
            InvalidArgumentError: If other is not an LWWElementSet.
        """
        require_kind(other, LWWElementSet, "a LWW element set")
        if other._bias is not self._bias:
            logger.debug(
                "Merging LWW set with bias %s into one with bias %s; keeping %s",
                other._bias.value,
                self._bias.value,
                self._bias.value,
            )
        adds_changed = _merge_timestamps(self._adds, other._adds)
        removes_changed = _merge_timestamps(self._removes, other._removes)
        logger.debug(
            "Merged LWW set: %d add and %d remove timestamps advanced",
            adds_changed,
            removes_changed,
        )
        return self

    def copy(self) -> Self:
        """Return an independent replica with the same maps and bias."""
        return type(self).create(self._adds, self._removes, self._bias)

    def to_dict(self) -> dict:
        """Serialize to a plain dict.

        Maps are encoded as ``[element, timestamp]`` pairs so that
        non-string elements survive.
        """
        return {
            "type": "LWWElementSet",
            "bias": self._bias.value,
            "adds": _encode_timestamps(self._adds),
            "removes": _encode_timestamps(self._removes),
        }

    @classmethod
    def from_dict(cls, data: dict) -> Self:
        """Deserialize from a plain dict.

        Args:
            data: Dict produced by ``to_dict()``.

        Raises:
            InvalidArgumentError: If the snapshot is malformed.
        """
        require_snapshot(data, "LWWElementSet", ("bias", "adds", "removes"))
        try:
            bias = Bias(data["bias"])
        except ValueError as e:
            raise InvalidArgumentError(f"unknown bias {data['bias']!r}") from e
        s = cls(bias)
        s._adds = _decode_timestamps(data["adds"], "add")
        s._removes = _decode_timestamps(data["removes"], "remove")
        return s

    def __contains__(self, element: Any) -> bool:
        return self.lookup(element)

    def __len__(self) -> int:
        return sum(1 for e in self._adds if self.lookup(e))

    def __iter__(self) -> Iterator[Any]:
        return iter([e for e in self._adds if self.lookup(e)])

    def __repr__(self) -> str:
        return f"LWWElementSet(bias={self._bias.name}, elements={self.elements!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LWWElementSet):
            return NotImplemented
        return (
            self._bias is other._bias
            and self._adds == other._adds
            and self._removes == other._removes
        )
