"""Optional per-path serialization of read-modify-write operations.

Without serialization, two concurrent mutations of the same path can both
read the same content and the last writer wins. When enabled, each resolved
path gets its own ``asyncio.Lock`` held for the whole read-modify-write.
A path's lock is dropped once its last holder or waiter leaves.
"""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

logger = logging.getLogger(__name__)


class PathLocks:
    """Per-path mutual exclusion tokens.

    Example:
        >>> locks = PathLocks(enabled=True)
        >>> async with locks.hold("/work/a.txt"):
        ...     ...  # read, modify, write
    """

    def __init__(self, enabled: bool = False):
        """Initialize PathLocks.

        Args:
            enabled: If False, ``hold`` never blocks
        """
        self.enabled = enabled
        self._locks: dict[str, asyncio.Lock] = {}
        # Holders plus waiters per path
        self._users: dict[str, int] = {}

    @property
    def active_paths(self) -> list[str]:
        """Paths that currently have a holder or waiter."""
        return list(self._locks)

    @asynccontextmanager
    async def hold(self, path: str) -> AsyncIterator[None]:
        """Hold the lock for ``path`` for the duration of the block."""
        if not self.enabled:
            yield
            return

        lock = self._locks.setdefault(path, asyncio.Lock())
        self._users[path] = self._users.get(path, 0) + 1
        if lock.locked():
            logger.debug(f"Waiting for pending edit on {path}")
        try:
            async with lock:
                yield
        finally:
            self._users[path] -= 1
            if not self._users[path]:
                del self._users[path]
                del self._locks[path]
