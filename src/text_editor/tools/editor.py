"""Text editor tools for sandboxed file editing.

This module is the boundary between a calling agent and the editing core.
Every tool resolves the caller's path through ``PathGuard`` before any
filesystem access, runs the core operation, and converts filesystem faults
into error responses.

Key Features:
- Sandbox confinement to a fixed set of allowed directories
- Multi-edit patching with exact-first, whitespace-tolerant fallback matching
- Line insertion
- Bounded per-file undo history
- Fenced unified diffs for every mutation
"""

import logging
from typing import Annotated, Any

from pydantic import Field, ValidationError

from text_editor.config.schema import EditorSettings
from text_editor.core.fileio import read_text, write_text
from text_editor.core.history import HistoryStore
from text_editor.core.insert import LineInserter
from text_editor.core.locks import PathLocks
from text_editor.core.matching import Edit
from text_editor.core.patch import PatchEngine
from text_editor.core.paths import PathGuard
from text_editor.core.undo import revert_last_edit
from text_editor.exceptions import ErrorKind
from text_editor.tools.toolset import EditorToolset

logger = logging.getLogger(__name__)

EDITOR_COMMANDS = ("str_replace", "insert", "undo_edit")


class TextEditorTools(EditorToolset):
    """Sandboxed text editing tools.

    One instance owns the process-lifetime undo history, so create it once
    at startup and route every request through it.

    Example:
        >>> settings = EditorSettings(allowed_directories=["/home/me/project"])
        >>> tools = TextEditorTools(settings)
        >>> result = await tools.str_replace("src/app.py", "DEBUG = True", "DEBUG = False")
        >>> print(render_tool_output(result))
        ```diff
        ...
    """

    def __init__(self, settings: EditorSettings, history: HistoryStore | None = None):
        """Initialize TextEditorTools.

        Args:
            settings: Editor settings with allowed directories
            history: Optional history store (a fresh one is created if omitted)
        """
        super().__init__(settings)
        self.guard = PathGuard(
            settings.allowed_directories, strict_boundaries=settings.strict_root_boundaries
        )
        self.history = history or HistoryStore(limit=settings.history_limit)
        self.locks = PathLocks(enabled=settings.serialize_edits)
        self.patch_engine = PatchEngine(self.history, self.locks)
        self.inserter = LineInserter(self.history, self.locks)

    def get_tools(self) -> list:
        """Get list of text editor tools.

        Returns:
            List of text editor tool functions
        """
        return [
            self.str_replace_editor,
            self.edit_file,
            self.str_replace,
            self.insert,
            self.undo_edit,
            self.view,
            self.create,
        ]

    def _filesystem_error(self, error: OSError, path: str) -> dict:
        """Convert a pass-through filesystem fault into an error response."""
        if isinstance(error, FileNotFoundError):
            return self._create_error_response(
                error=ErrorKind.NOT_FOUND, message=f"File not found: {path}"
            )
        if isinstance(error, PermissionError):
            return self._create_error_response(
                error=ErrorKind.PERMISSION_DENIED, message=f"Permission denied: {path}"
            )
        if isinstance(error, IsADirectoryError):
            return self._create_error_response(
                error=ErrorKind.NOT_A_FILE, message=f"Path is not a file: {path}"
            )
        logger.error(f"Filesystem error on {path}: {error}")
        return self._create_error_response(
            error=ErrorKind.OS_ERROR, message=f"Error accessing {path}: {error}"
        )

    def _parse_edits(self, edits: list[Any]) -> list[Edit] | dict:
        if not edits:
            return self._create_error_response(
                error=ErrorKind.INVALID_ARGUMENT, message="edits must contain at least one edit"
            )
        try:
            return [e if isinstance(e, Edit) else Edit.model_validate(e) for e in edits]
        except ValidationError as e:
            return self._create_error_response(
                error=ErrorKind.INVALID_ARGUMENT, message=f"Invalid edits: {e}"
            )

    async def edit_file(
        self,
        path: Annotated[str, Field(description="File path inside an allowed directory")],
        edits: Annotated[
            list[Edit], Field(description="Ordered edits, each with oldText and newText")
        ],
        dry_run: Annotated[bool, Field(description="Preview the diff without writing")] = False,
    ) -> dict:
        """Apply one or more text edits to a file and return a unified diff.

        Each edit replaces the first exact occurrence of its old text. If the
        old text does not occur literally, it is matched line by line ignoring
        leading and trailing whitespace, and the replacement is re-indented to
        the matched block. Edits apply in order, each to the result of the
        previous one. If any edit fails to match, nothing is written.

        Args:
            path: File path inside an allowed directory
            edits: Ordered edits (``Edit`` models or ``{"oldText", "newText"}`` dicts)
            dry_run: If True, return the diff without saving history or writing

        Returns:
            Success response with the fenced diff, or an error response
            (access_denied, parent_not_found, no_match_found, not_found, ...)
        """
        resolved = self.guard.resolve(path)
        if isinstance(resolved, dict):
            return resolved

        parsed = self._parse_edits(edits)
        if isinstance(parsed, dict):
            return parsed

        try:
            return await self.patch_engine.apply(resolved, parsed, dry_run=dry_run)
        except OSError as e:
            return self._filesystem_error(e, path)

    async def str_replace(
        self,
        path: Annotated[str, Field(description="File path inside an allowed directory")],
        old_str: Annotated[str, Field(description="Text to search for - must match exactly")],
        new_str: Annotated[str, Field(description="Text to replace with")],
    ) -> dict:
        """Replace text in a file using string matching.

        Args:
            path: File path inside an allowed directory
            old_str: Text to find (must be non-empty)
            new_str: Replacement text (may be empty to delete)

        Returns:
            Success response with the fenced diff, or an error response
        """
        if not old_str:
            return self._create_error_response(
                error=ErrorKind.INVALID_ARGUMENT,
                message="old_str cannot be empty. Provide the text to replace.",
            )
        return await self.edit_file(path, [Edit(old_text=old_str, new_text=new_str)])

    async def insert(
        self,
        path: Annotated[str, Field(description="File path inside an allowed directory")],
        insert_line: Annotated[
            int, Field(description="Line number after which to insert (0 for beginning)")
        ],
        new_str: Annotated[str, Field(description="Text to insert")],
    ) -> dict:
        """Insert text after a specific line of a file.

        Line numbers are 0-indexed: 0 inserts at the beginning, and a line
        number past the end of the file appends.

        Args:
            path: File path inside an allowed directory
            insert_line: Line after which to insert
            new_str: Text inserted verbatim

        Returns:
            Success response with the fenced diff, or an error response
        """
        resolved = self.guard.resolve(path)
        if isinstance(resolved, dict):
            return resolved

        try:
            return await self.inserter.insert_after(resolved, insert_line, new_str)
        except OSError as e:
            return self._filesystem_error(e, path)

    async def undo_edit(
        self,
        path: Annotated[str, Field(description="File path inside an allowed directory")],
    ) -> dict:
        """Revert the last edit or insertion made to a file.

        Repeated undos walk further back through up to the configured number
        of snapshots. Undo cannot itself be undone.

        Args:
            path: File path inside an allowed directory

        Returns:
            Success response with the fenced diff and a revert note, or a
            ``no_history`` error response
        """
        resolved = self.guard.resolve(path)
        if isinstance(resolved, dict):
            return resolved

        try:
            result = await revert_last_edit(resolved, self.history, self.locks)
        except OSError as e:
            return self._filesystem_error(e, path)

        if not result["success"] and result["error"] == ErrorKind.NO_HISTORY.value:
            # Report the caller's path rather than the resolved one
            return self._create_error_response(
                error=ErrorKind.NO_HISTORY, message=f"No edit history available for {path}"
            )
        return result

    async def view(
        self,
        path: Annotated[str, Field(description="File path inside an allowed directory")],
        view_range: Annotated[
            list[int] | None,
            Field(description="[start_line, end_line] - 1-indexed, inclusive; -1 for end of file"),
        ] = None,
    ) -> dict:
        """View the contents of a file, optionally limited to a line range.

        Args:
            path: File path inside an allowed directory
            view_range: Optional ``[start, end]`` (1-indexed, inclusive, ``-1``
                meaning end of file)

        Returns:
            Success response with the file text, or an error response
        """
        if view_range is not None and len(view_range) != 2:
            return self._create_error_response(
                error=ErrorKind.INVALID_ARGUMENT,
                message=f"view_range must be [start_line, end_line], got {view_range}",
            )

        resolved = self.guard.resolve(path)
        if isinstance(resolved, dict):
            return resolved

        if resolved.path.is_dir():
            return self._create_error_response(
                error=ErrorKind.NOT_A_FILE, message=f"Path is not a file: {path}"
            )

        try:
            content = await read_text(resolved.path)
        except OSError as e:
            return self._filesystem_error(e, path)

        if view_range is None:
            return self._create_success_response(result=content, message=f"Read {path}")

        lines = content.split("\n")
        start, end = view_range
        start_idx = max(0, start - 1)
        end_idx = len(lines) if end == -1 else min(len(lines), end)
        selected = lines[start_idx:end_idx]

        return self._create_success_response(
            result="\n".join(selected),
            message=f"Read {len(selected)} lines from {path}",
        )

    async def create(
        self,
        path: Annotated[str, Field(description="File path inside an allowed directory")],
        content: Annotated[str, Field(description="Content of the new file")],
    ) -> dict:
        """Create a file with the given content, overwriting an existing file.

        Creation is not recorded in the undo history.

        Args:
            path: File path inside an allowed directory (parent must exist)
            content: File content

        Returns:
            Success response with a confirmation message, or an error response
        """
        resolved = self.guard.resolve(path)
        if isinstance(resolved, dict):
            return resolved

        try:
            await write_text(resolved.path, content)
        except OSError as e:
            return self._filesystem_error(e, path)

        logger.info(f"Created {resolved}")
        return self._create_success_response(
            result=f"Successfully created {path}", message=f"Created {path}"
        )

    async def str_replace_editor(
        self,
        command: Annotated[str, Field(description="One of: str_replace, insert, undo_edit")],
        path: Annotated[str, Field(description="File path inside an allowed directory")],
        old_str: Annotated[str | None, Field(description="Text to replace (str_replace)")] = None,
        new_str: Annotated[
            str | None, Field(description="Replacement or inserted text (str_replace, insert)")
        ] = None,
        insert_line: Annotated[
            int | None, Field(description="Line after which to insert (insert)")
        ] = None,
    ) -> dict:
        """Multi-command file editor supporting replacement, insertion, and undo.

        Args:
            command: ``str_replace``, ``insert`` or ``undo_edit``
            path: File path inside an allowed directory
            old_str: Text to replace (``str_replace``)
            new_str: Replacement text (``str_replace``) or text to insert (``insert``)
            insert_line: Line after which to insert (``insert``)

        Returns:
            The response of the selected command, or ``invalid_argument``
        """
        if command == "str_replace":
            if old_str is None or new_str is None:
                return self._create_error_response(
                    error=ErrorKind.INVALID_ARGUMENT,
                    message="str_replace command requires old_str and new_str",
                )
            return await self.str_replace(path, old_str, new_str)

        if command == "insert":
            if insert_line is None or new_str is None:
                return self._create_error_response(
                    error=ErrorKind.INVALID_ARGUMENT,
                    message="insert command requires insert_line and new_str",
                )
            return await self.insert(path, insert_line, new_str)

        if command == "undo_edit":
            return await self.undo_edit(path)

        return self._create_error_response(
            error=ErrorKind.INVALID_ARGUMENT,
            message=f"Unknown command: {command}. Valid commands: {', '.join(EDITOR_COMMANDS)}",
        )
