"""Revert a file to its most recent snapshot."""

import logging

from text_editor.core.diff import format_diff
from text_editor.core.fileio import read_text, write_text
from text_editor.core.history import HistoryStore
from text_editor.core.locks import PathLocks
from text_editor.core.paths import ResolvedPath
from text_editor.utils.responses import create_success_response, is_error

logger = logging.getLogger(__name__)

REVERT_NOTE = "Reverted to previous version."


async def revert_last_edit(
    path: ResolvedPath, history: HistoryStore, locks: PathLocks | None = None
) -> dict:
    """Restore the latest snapshot of ``path`` and return the fenced diff.

    The reverted-from content is not pushed back onto the history, so
    repeated undos walk further back and cannot be redone.

    Args:
        path: File to revert
        history: Store holding the snapshots
        locks: Optional per-path locks

    Returns:
        Success response whose result is the diff (current -> snapshot)
        followed by the revert note, or a ``no_history`` error response
    """
    locks = locks or PathLocks(enabled=False)

    async with locks.hold(path.key):
        previous = history.pop(path.key)
        if is_error(previous):
            return previous

        try:
            current = await read_text(path.path)
            await write_text(path.path, previous)
        except OSError:
            # Keep the snapshot so the undo can be retried
            history.snapshot(path.key, previous)
            raise
        logger.info(f"Reverted {path} ({history.depth(path.key)} snapshot(s) left)")

    return create_success_response(
        result=format_diff(current, previous, str(path), note=REVERT_NOTE),
        message=f"Reverted {path} to previous version",
    )
