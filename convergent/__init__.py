"""convergent - state-based CRDT primitives.

Replicas mutate their own copy of a CRDT and reconcile with ``merge``,
which converges regardless of delivery order, duplication, or timing.

Example::

    from convergent import GrowOnlyCounter

    a = GrowOnlyCounter.create([1, 2, 3])
    a.merge(GrowOnlyCounter.create([3, 2, 1]))
    assert a.value == 8
"""

import logging

from convergent.crdt import (
    CRDT,
    Bias,
    GrowOnlyCounter,
    GrowOnlySet,
    LWWElementSet,
    from_dict,
    state_digest,
)
from convergent.errors import CRDTError, InvalidArgumentError, InvalidLengthError
from convergent.logging_config import (
    configure_from_env,
    disable_logging,
    enable_console_logging,
    enable_file_logging,
    enable_json_logging,
    set_level,
    set_module_level,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # CRDTs
    "CRDT",
    "Bias",
    "GrowOnlyCounter",
    "GrowOnlySet",
    "LWWElementSet",
    # Snapshots
    "from_dict",
    "state_digest",
    # Errors
    "CRDTError",
    "InvalidArgumentError",
    "InvalidLengthError",
    # Logging
    "configure_from_env",
    "disable_logging",
    "enable_console_logging",
    "enable_file_logging",
    "enable_json_logging",
    "set_level",
    "set_module_level",
]
