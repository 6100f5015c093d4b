"""Type-dispatching reconstruction and digests of CRDT snapshots.

A transport or persistence layer that receives a snapshot without knowing
its CRDT type in advance can rebuild it with :func:`from_dict`, which
dispatches on the snapshot's ``type`` field. :func:`state_digest` gives a
stable fingerprint of a replica's state so that two replicas can check
whether they have converged without exchanging full state.
"""

from __future__ import annotations

import hashlib
import json
import logging
from typing import Any

from convergent.crdt.canonical import canonical
from convergent.crdt.g_counter import GrowOnlyCounter
from convergent.crdt.g_set import GrowOnlySet
from convergent.crdt.lww_element_set import LWWElementSet
from convergent.crdt.protocol import CRDT
from convergent.errors import InvalidArgumentError

logger = logging.getLogger(__name__)

CRDT_TYPES: dict[str, type] = {
    "GrowOnlyCounter": GrowOnlyCounter,
    "GrowOnlySet": GrowOnlySet,
    "LWWElementSet": LWWElementSet,
}


def from_dict(data: Any) -> CRDT:
    """Reconstruct a CRDT from a snapshot produced by ``to_dict()``.

    Args:
        data: Snapshot dict carrying a ``type`` field.

    Returns:
        A new CRDT instance of the tagged type.

    Raises:
        InvalidArgumentError: If data is not a dict, its type is unknown,
            or the snapshot is malformed.
    """
    if not isinstance(data, dict):
        raise InvalidArgumentError(f"snapshot should be a dict, got {type(data).__name__}")
    crdt_type = data.get("type", "")
    cls = CRDT_TYPES.get(crdt_type) if isinstance(crdt_type, str) else None
    if cls is None:
        raise InvalidArgumentError(f"unknown CRDT type: {crdt_type!r}")
    logger.debug("Reconstructing %s from snapshot", crdt_type)
    return cls.from_dict(data)


def state_digest(crdt: CRDT) -> str:
    """Compute a stable hex digest of a CRDT's state.

    Replicas with equal state produce equal digests, independent of
    insertion order and of the process hash seed (see
    :mod:`convergent.crdt.canonical` for which element types are stable).

    Args:
        crdt: Any CRDT implementing ``to_dict()``.
    """
    content = json.dumps(canonical(crdt.to_dict()), sort_keys=True)
    return hashlib.sha256(content.encode()).hexdigest()
