from __future__ import annotations

import threading
from contextlib import AbstractContextManager, nullcontext
from enum import Enum
from typing import Any


class LockMode(Enum):
    """Select locking behavior for container operations.

    The container is single-threaded by default. Use ``THREAD`` when one
    container is shared between threads: ``get``'s cache-miss, compute, store
    and freeze sequence then runs as one serialized region, so a singleton is
    never built twice and no ``bind`` slips in after a concurrent freeze.
    """

    THREAD = "thread"
    """Guard every container operation with one ``threading.RLock``."""

    NONE = "none"
    """Disable locking."""

    def create_lock(self) -> AbstractContextManager[Any]:
        """Return the lock object used by a container in this mode.

        The thread lock is re-entrant because ``get`` recurses through
        producers and autowiring on the same thread.
        """
        if self is LockMode.THREAD:
            return threading.RLock()
        return nullcontext()
