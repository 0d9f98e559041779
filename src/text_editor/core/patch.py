"""Multi-edit patch engine.

Applies an ordered list of edits to a file. Each edit is matched against
the buffer as already modified by the previous edits in the same request,
not against the untouched original. A request either succeeds as a whole
and is written, or fails before anything is written.
"""

import logging
from collections.abc import Sequence

from text_editor.core.diff import format_diff, normalize_line_endings
from text_editor.core.fileio import read_text, write_text
from text_editor.core.history import HistoryStore
from text_editor.core.locks import PathLocks
from text_editor.core.matching import Edit, apply_edit
from text_editor.core.paths import ResolvedPath
from text_editor.exceptions import ErrorKind
from text_editor.utils.responses import create_error_response, create_success_response

logger = logging.getLogger(__name__)


class PatchEngine:
    """Apply exact-or-fuzzy text edits to a sandboxed file.

    Example:
        >>> engine = PatchEngine(HistoryStore())
        >>> result = await engine.apply(resolved, [Edit(old_text="foo", new_text="bar")])
        >>> print(result["result"])
        ```diff
        ===================================================================
        --- /work/a.txt	original
        +++ /work/a.txt	modified
        ...
    """

    def __init__(self, history: HistoryStore, locks: PathLocks | None = None):
        """Initialize PatchEngine.

        Args:
            history: Store that receives the pre-edit snapshot
            locks: Optional per-path locks serializing read-modify-write
        """
        self.history = history
        self.locks = locks or PathLocks(enabled=False)

    async def apply(
        self, path: ResolvedPath, edits: Sequence[Edit], dry_run: bool = False
    ) -> dict:
        """Apply ``edits`` in order and return the fenced diff.

        The undo snapshot is pushed only once every edit has matched, right
        before the write. A request that fails on any edit leaves the file
        and the history depth unchanged, so it never adds an undo entry.

        Args:
            path: File to edit
            edits: Edits applied left to right against the evolving buffer
            dry_run: If True, compute the diff without snapshotting or writing

        Returns:
            Success response with the fenced diff as result, or a
            ``no_match_found`` error response

        Raises:
            OSError: Filesystem faults (missing file, permission denied)
                propagate unmodified
        """
        async with self.locks.hold(path.key):
            original = normalize_line_endings(await read_text(path.path))

            buffer = original
            for index, edit in enumerate(edits, start=1):
                outcome = apply_edit(buffer, edit)
                if outcome is None:
                    logger.info(f"Edit {index}/{len(edits)} did not match in {path}")
                    return create_error_response(
                        error=ErrorKind.NO_MATCH_FOUND,
                        message=f"Could not find exact match for edit:\n{edit.old_text}",
                    )
                buffer, strategy = outcome
                logger.debug(f"Edit {index}/{len(edits)} applied to {path} ({strategy.value})")

            diff = format_diff(original, buffer, str(path))

            if not dry_run:
                self.history.snapshot(path.key, original)
                await write_text(path.path, buffer)
                logger.info(f"Applied {len(edits)} edit(s) to {path}")

        verb = "Previewed" if dry_run else "Applied"
        return create_success_response(
            result=diff, message=f"{verb} {len(edits)} edit(s) to {path}"
        )
