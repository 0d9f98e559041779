"""Insert a literal text block after a given line."""

import logging

from text_editor.core.diff import format_diff
from text_editor.core.fileio import read_text, write_text
from text_editor.core.history import HistoryStore
from text_editor.core.locks import PathLocks
from text_editor.core.paths import ResolvedPath
from text_editor.exceptions import ErrorKind
from text_editor.utils.responses import create_error_response, create_success_response

logger = logging.getLogger(__name__)


def insert_lines(content: str, line_index: int, text: str) -> str:
    """Return ``content`` with ``text`` spliced in after line ``line_index``.

    ``line_index == 0`` prepends; indices past the end append. The inserted
    text is neither normalized nor re-indented.
    """
    lines = content.split("\n")
    if line_index == 0:
        lines.insert(0, text)
    else:
        lines.insert(min(line_index, len(lines)), text)
    return "\n".join(lines)


class LineInserter:
    """Insert text into a sandboxed file, snapshotting it first."""

    def __init__(self, history: HistoryStore, locks: PathLocks | None = None):
        self.history = history
        self.locks = locks or PathLocks(enabled=False)

    async def insert_after(self, path: ResolvedPath, line_index: int, text: str) -> dict:
        """Insert ``text`` after line ``line_index`` and return the fenced diff.

        Args:
            path: File to modify
            line_index: Line after which to insert (0 for the beginning)
            text: Text inserted verbatim

        Returns:
            Success response with the fenced diff, or ``invalid_argument``
            for a negative index
        """
        if line_index < 0:
            return create_error_response(
                error=ErrorKind.INVALID_ARGUMENT,
                message=f"insert_line must be non-negative, got {line_index}",
            )

        async with self.locks.hold(path.key):
            original = await read_text(path.path)
            self.history.snapshot(path.key, original)

            modified = insert_lines(original, line_index, text)
            await write_text(path.path, modified)
            logger.info(f"Inserted text after line {line_index} in {path}")

        return create_success_response(
            result=format_diff(original, modified, str(path)),
            message=f"Inserted text after line {line_index} in {path}",
        )
