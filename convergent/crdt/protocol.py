"""Protocol definition for Conflict-free Replicated Data Types (CRDTs).

A state-based CRDT is a join-semilattice: ``merge`` computes the least
upper bound of two replica states and ``compare`` is the matching partial
order. Any implementation must satisfy:

- **Commutativity**: ``merge(a, b) == merge(b, a)``
- **Associativity**: ``merge(a, merge(b, c)) == merge(merge(a, b), c)``
- **Idempotency**: ``merge(a, a) == a``

These properties guarantee that replicas converge to the same state
regardless of the order or number of merge operations.
"""

from __future__ import annotations

from typing import Any, Protocol, Self, runtime_checkable


@runtime_checkable
class CRDT(Protocol):
    """Protocol for all CRDT types.

    All CRDTs must support:
    - ``value``: Read the current resolved value.
    - ``compare(other)``: Partial order test (``self <= other``).
    - ``merge(other)``: Join another replica's state into this one.
    - ``to_dict()`` / ``from_dict()``: Plain-dict snapshots for transport.
    """

    @property
    def value(self) -> Any:
        """The current resolved value of this CRDT."""
        ...

    def compare(self, other: Self) -> bool:
        """Return True if this replica's state is <= ``other``'s.

        Args:
            other: Another instance of the same CRDT type.
        """
        ...

    def merge(self, other: Self) -> Self:
        """Merge another replica's state into this one (in-place).

        Must be commutative, associative, and idempotent. ``other`` is
        never mutated.

        Args:
            other: Another instance of the same CRDT type.

        Returns:
            This instance, to allow chained merges.
        """
        ...

    def to_dict(self) -> dict:
        """Serialize this CRDT's state to a plain dict."""
        ...

    @classmethod
    def from_dict(cls, data: dict) -> Self:
        """Deserialize a CRDT from a plain dict.

        Args:
            data: Dict produced by ``to_dict()``.
        """
        ...
