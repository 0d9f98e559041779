"""Sandbox path resolution.

Every caller-supplied path passes through ``PathGuard.resolve`` before any
filesystem access. The guard confines paths to a fixed set of allowed roots:

1. A syntactic check on the normalized absolute path (no filesystem access)
2. A second check on the real path once symlinks are dereferenced
3. For files that do not exist yet, a check on the real parent directory

A symlink planted inside an allowed root that points outside every root is
rejected by the second check.
"""

import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from text_editor.exceptions import ErrorKind
from text_editor.utils.responses import create_error_response

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedPath:
    """An absolute path proven to lie under an allowed root.

    Only ``PathGuard.resolve`` creates these; I/O components accept nothing
    else.

    Attributes:
        path: Real path for existing targets, normalized absolute path for
            targets that do not exist yet
        exists: Whether the target existed at resolution time
    """

    path: Path
    exists: bool = True

    def __str__(self) -> str:
        return str(self.path)

    @property
    def key(self) -> str:
        """Key used for per-path history and locks."""
        return str(self.path)


def expand_home(path: str) -> str:
    """Expand a leading ``~`` (``~`` or ``~/...``) to the home directory."""
    if path == "~" or path.startswith("~/") or path.startswith("~" + os.sep):
        return str(Path.home()) + path[1:]
    return path


def normalize_path(path: str) -> str:
    """Make ``path`` absolute and collapse ``.``/``..`` without touching the filesystem."""
    return os.path.normpath(os.path.abspath(expand_home(path)))


class PathGuard:
    """Resolve and validate caller paths against the allowed-root set.

    Example:
        >>> guard = PathGuard(["/home/me/project"])
        >>> resolved = guard.resolve("~/project/src/main.py")
        >>> if isinstance(resolved, dict):
        ...     return resolved  # Error response
        >>> resolved.path
        PosixPath('/home/me/project/src/main.py')
    """

    def __init__(self, allowed_directories: Iterable[str], strict_boundaries: bool = True):
        """Initialize PathGuard.

        Args:
            allowed_directories: Root directories; fixed for the guard's lifetime
            strict_boundaries: If True, a root only matches at a path-segment
                boundary ("/a/allowed" does not admit "/a/allowed-evil").
                If False, fall back to a raw string-prefix test.
        """
        roots: list[str] = []
        for directory in allowed_directories:
            normalized = normalize_path(str(directory))
            # Keep the real form too so roots reached through a symlink
            # (e.g. /tmp -> /private/tmp) pass the post-resolution check.
            real = os.path.realpath(normalized)
            for candidate in (normalized, real):
                if candidate not in roots:
                    roots.append(candidate)

        self._roots: tuple[str, ...] = tuple(roots)
        self.strict_boundaries = strict_boundaries

    @property
    def allowed_directories(self) -> tuple[str, ...]:
        """Canonical roots (normalized and real-path forms)."""
        return self._roots

    def is_allowed(self, path: str) -> bool:
        """Return True if ``path`` lies under one of the roots.

        Args:
            path: Canonical absolute path
        """
        for root in self._roots:
            if not path.startswith(root):
                continue
            if not self.strict_boundaries:
                return True
            rest = path[len(root) :]
            if rest == "" or rest.startswith(os.sep) or root.endswith(os.sep):
                return True
        return False

    def _deny(self, requested_path: str, reason: str) -> dict:
        logger.warning(f"Access denied for {requested_path}: {reason}")
        return create_error_response(
            error=ErrorKind.ACCESS_DENIED,
            message=f"Access denied - {reason}",
        )

    def _resolution_failed(self, requested_path: str, error: Exception) -> dict:
        logger.error(f"Error resolving path {requested_path}: {error}")
        return create_error_response(
            error=ErrorKind.OS_ERROR,
            message=f"Failed to resolve path: {requested_path}. Error: {error}",
        )

    def resolve(self, requested_path: str) -> ResolvedPath | dict:
        """Resolve ``requested_path`` to a ResolvedPath or fail closed.

        Args:
            requested_path: Relative, absolute or ``~``-relative path

        Returns:
            ResolvedPath if the path is inside the sandbox, otherwise an error
            response with kind ``access_denied``, ``parent_not_found`` or
            ``os_error`` (the path could not be resolved, e.g. a symlink loop)
        """
        absolute = normalize_path(requested_path)

        if not self.is_allowed(absolute):
            return self._deny(
                requested_path,
                f"path outside allowed directories: {absolute} not in "
                f"{', '.join(self._roots)}",
            )

        try:
            real = str(Path(absolute).resolve(strict=True))
        except (FileNotFoundError, NotADirectoryError):
            return self._resolve_new_file(requested_path, absolute)
        except (OSError, RuntimeError) as e:
            # Symlink loops raise RuntimeError before Python 3.13, OSError(ELOOP) after
            return self._resolution_failed(requested_path, e)

        if not self.is_allowed(real):
            return self._deny(requested_path, "symlink target outside allowed directories")

        logger.debug(f"Path resolved: {requested_path} -> {real}")
        return ResolvedPath(path=Path(real), exists=True)

    def _resolve_new_file(self, requested_path: str, absolute: str) -> ResolvedPath | dict:
        """Validate a target that does not exist yet through its parent directory."""
        if os.path.islink(absolute):
            # Dangling symlink: writing would create its target
            try:
                target = str(Path(absolute).resolve(strict=False))
            except (OSError, RuntimeError) as e:
                return self._resolution_failed(requested_path, e)
            if not self.is_allowed(target):
                return self._deny(requested_path, "symlink target outside allowed directories")

        parent = os.path.dirname(absolute)
        try:
            real_parent = str(Path(parent).resolve(strict=True))
        except (FileNotFoundError, NotADirectoryError):
            real_parent = None
        except (OSError, RuntimeError) as e:
            return self._resolution_failed(requested_path, e)

        if real_parent is None or not os.path.isdir(real_parent):
            return create_error_response(
                error=ErrorKind.PARENT_NOT_FOUND,
                message=f"Parent directory does not exist: {parent}",
            )

        if not self.is_allowed(real_parent):
            logger.warning(f"Parent of {requested_path} resolves outside allowed directories")
            return create_error_response(
                error=ErrorKind.PARENT_NOT_FOUND,
                message=f"Parent directory does not exist: {parent}",
            )

        logger.debug(f"New file path resolved: {requested_path} -> {absolute}")
        return ResolvedPath(path=Path(absolute), exists=False)
