"""Error taxonomy shared by every CRDT in :mod:`convergent.crdt`.

Both errors describe programmer mistakes (malformed input), not transient
runtime conditions, so nothing here is ever retried. Validation always runs
before mutation: a call that raises leaves its receiver untouched.
"""

from __future__ import annotations

__all__ = [
    "CRDTError",
    "InvalidArgumentError",
    "InvalidLengthError",
]


class CRDTError(ValueError):
    """Base class for all CRDT validation failures.

    Args:
        message: Human-readable description, returned by ``str(error)``.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class InvalidArgumentError(CRDTError):
    """An input had the wrong type, shape, or range.

    Raised for non-integer or non-positive sizes and timestamps, out-of-range
    slot indices, ``compare``/``merge`` operands of the wrong CRDT kind, and
    malformed snapshots passed to ``from_dict``.
    """


class InvalidLengthError(CRDTError):
    """Two counters with different slot counts were compared or merged."""
