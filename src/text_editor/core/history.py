"""In-memory, bounded per-path undo history.

A ``HistoryStore`` is created at startup, injected into the components that
mutate files, and dropped at shutdown. Nothing is persisted.
"""

import logging
from collections import deque

from text_editor.config.constants import DEFAULT_HISTORY_LIMIT
from text_editor.exceptions import ErrorKind
from text_editor.utils.responses import create_error_response

logger = logging.getLogger(__name__)


class HistoryStore:
    """LIFO stacks of pre-edit snapshots keyed by resolved path.

    Each stack keeps at most ``limit`` snapshots; pushing onto a full stack
    evicts the oldest one.

    Example:
        >>> history = HistoryStore(limit=10)
        >>> history.snapshot("/work/a.txt", "before")
        >>> history.pop("/work/a.txt")
        'before'
    """

    def __init__(self, limit: int = DEFAULT_HISTORY_LIMIT):
        """Initialize an empty store.

        Args:
            limit: Maximum snapshots kept per path (must be >= 1)
        """
        if limit < 1:
            raise ValueError(f"History limit must be at least 1, got {limit}")
        self.limit = limit
        self._stacks: dict[str, deque[str]] = {}

    def snapshot(self, path: str, content: str) -> None:
        """Push a full copy of ``content`` onto the stack for ``path``."""
        stack = self._stacks.setdefault(path, deque(maxlen=self.limit))
        if len(stack) == self.limit:
            logger.debug(f"History for {path} full, evicting oldest snapshot")
        stack.append(content)
        logger.debug(f"Saved snapshot for {path} (depth {len(stack)})")

    def pop(self, path: str) -> str | dict:
        """Remove and return the most recent snapshot for ``path``.

        Returns:
            Snapshot content, or a ``no_history`` error response if the
            stack is empty or absent
        """
        stack = self._stacks.get(path)
        if not stack:
            return create_error_response(
                error=ErrorKind.NO_HISTORY,
                message=f"No edit history available for {path}",
            )
        return stack.pop()

    def depth(self, path: str) -> int:
        """Number of snapshots currently held for ``path``."""
        return len(self._stacks.get(path, ()))

    def clear(self, path: str | None = None) -> None:
        """Drop the history of one path, or of every path."""
        if path is None:
            self._stacks.clear()
        else:
            self._stacks.pop(path, None)
