"""State-based Conflict-free Replicated Data Types (CRDTs).

CRDTs are data structures that replicas mutate independently and later
reconcile with ``merge``. Merge is a semilattice join: commutative,
associative, and idempotent, so replicas converge regardless of the
order or number of merges.

Provided CRDTs:

- **GrowOnlyCounter**: Fixed slots, increment only; value is the slot sum
- **GrowOnlySet**: Add-only set; merge is union
- **LWWElementSet**: Add/remove set resolved by timestamps and a ``Bias``

``from_dict`` and ``state_digest`` help a transport layer rebuild
snapshots and check convergence.
"""

from convergent.crdt.protocol import CRDT
from convergent.crdt.g_counter import GrowOnlyCounter
from convergent.crdt.g_set import GrowOnlySet
from convergent.crdt.lww_element_set import Bias, LWWElementSet
from convergent.crdt.snapshot import from_dict, state_digest

__all__ = [
    "CRDT",
    "Bias",
    "GrowOnlyCounter",
    "GrowOnlySet",
    "LWWElementSet",
    "from_dict",
    "state_digest",
]
