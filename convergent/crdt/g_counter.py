"""Grow-only counter (G-Counter) CRDT.

A G-Counter is a replicated counter that can only be incremented. It
holds a fixed number of slots, one per contributing replica; each
replica only increments its own slot. The total value is the sum of all
slots and merge takes the slot-wise maximum.

Example::

    a = GrowOnlyCounter.create([1, 2, 3])
    b = GrowOnlyCounter.create([3, 2, 1])

    a.merge(b)
    assert a.slots == (3, 2, 3)
    assert a.value == 8
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Self

from convergent.crdt.validation import (
    require_integer,
    require_iterable,
    require_kind,
    require_non_negative,
    require_positive,
    require_snapshot,
)
from convergent.errors import InvalidArgumentError, InvalidLengthError

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)


class GrowOnlyCounter:
    """Grow-only counter CRDT with a fixed number of slots.

    Every slot is monotonically non-decreasing. The partial order is
    slot-wise ``<=``; merge uses slot-wise max, which is commutative,
    associative, and idempotent.

    Args:
        n: Number of slots (must be a positive integer).

    Raises:
        InvalidArgumentError: If n is not a positive integer.
    """

    __slots__ = ("_slots",)

    def __init__(self, n: int):
        require_positive(n, "slot count")
        self._slots: list[int] = [0] * n

    @classmethod
    def create(cls, slots: Sequence[int]) -> Self:
        """Create a counter initialized with explicit slot values.

        Args:
            slots: Initial slot values; each must be a non-negative integer.

        Raises:
            InvalidArgumentError: If slots is not iterable, is empty, or holds
                an invalid value.
        """
        require_iterable(slots, "slots")
        slots = list(slots)
        for i, count in enumerate(slots):
            require_non_negative(count, f"slot {i}")
        counter = cls(len(slots))
        counter._slots = slots
        return counter

    @property
    def value(self) -> int:
        """Total count across all slots."""
        return sum(self._slots)

    @property
    def slots(self) -> tuple[int, ...]:
        """Current slot values."""
        return tuple(self._slots)

    def increment(self, idx: int) -> None:
        """Increment one slot by one.

        Args:
            idx: Index of the slot to increment.

        Raises:
            InvalidArgumentError: If idx is not an integer in ``[0, n)``.
        """
        require_integer(idx, "index")
        if idx < 0:
            raise InvalidArgumentError(f"index should be non-negative, got {idx}")
        if idx >= len(self._slots):
            raise InvalidArgumentError(
                f"index should be within the counter, [0..{len(self._slots)}), got {idx}"
            )
        self._slots[idx] += 1

    def _check_operand(self, other: object) -> None:
        require_kind(other, GrowOnlyCounter, "a grow-only counter")
        if len(self._slots) != len(other._slots):
            raise InvalidLengthError(
                f"length of two counters do not match: {len(self._slots)} != {len(other._slots)}"
            )

    def compare(self, other: GrowOnlyCounter) -> bool:
        """Return True if no slot of this counter exceeds ``other``'s.

        Args:
            other: Counter to compare against.

        Raises:
            InvalidArgumentError: If other is not a GrowOnlyCounter.
            InvalidLengthError: If the slot counts differ.
        """
        self._check_operand(other)
        return all(mine <= theirs for mine, theirs in zip(self._slots, other._slots))

    def merge(self, other: GrowOnlyCounter) -> Self:
        """Merge another counter into this one (slot-wise max).

        Args:
            other: Counter to merge from. It is not modified.

        Returns:
            This counter.

        Raises:
            InvalidArgumentError: If other is not a GrowOnlyCounter.
            InvalidLengthError: If the slot counts differ.
        """
        self._check_operand(other)
        self._slots = [max(mine, theirs) for mine, theirs in zip(self._slots, other._slots)]
        logger.debug("Merged counter, slots now %s", self._slots)
        return self

    def copy(self) -> Self:
        """Return an independent replica with the same slots."""
        return type(self).create(self._slots)

    def to_dict(self) -> dict:
        """Serialize to a plain dict."""
        return {
            "type": "GrowOnlyCounter",
            "slots": list(self._slots),
        }

    @classmethod
    def from_dict(cls, data: dict) -> Self:
        """Deserialize from a plain dict.

        Args:
            data: Dict produced by ``to_dict()``.

        Raises:
            InvalidArgumentError: If the snapshot is malformed.
        """
        require_snapshot(data, "GrowOnlyCounter", ("slots",))
        slots = data["slots"]
        if not isinstance(slots, (list, tuple)):
            raise InvalidArgumentError(f"slots should be a list, got {type(slots).__name__}")
        return cls.create(slots)

    def __len__(self) -> int:
        return len(self._slots)

    def __repr__(self) -> str:
        return f"GrowOnlyCounter(slots={self._slots!r}, value={self.value})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GrowOnlyCounter):
            return NotImplemented
        return self._slots == other._slots
