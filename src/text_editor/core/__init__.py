"""Core editing components: path guard, matching, patching, history, diffs."""

from text_editor.core.diff import create_unified_diff, fence_diff, format_diff
from text_editor.core.history import HistoryStore
from text_editor.core.insert import LineInserter
from text_editor.core.locks import PathLocks
from text_editor.core.matching import Edit, MatchStrategy, apply_edit
from text_editor.core.patch import PatchEngine
from text_editor.core.paths import PathGuard, ResolvedPath
from text_editor.core.undo import revert_last_edit

__all__ = [
    "Edit",
    "HistoryStore",
    "LineInserter",
    "MatchStrategy",
    "PatchEngine",
    "PathGuard",
    "PathLocks",
    "ResolvedPath",
    "apply_edit",
    "create_unified_diff",
    "fence_diff",
    "format_diff",
    "revert_last_edit",
]
