"""Error kinds and exceptions for the text editor.

Core operations report failures as tagged response dicts (see
``text_editor.utils.responses``) whose ``error`` field is always one of the
``ErrorKind`` values below, so callers can branch on the kind instead of
parsing message text. Exceptions are reserved for startup problems.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Closed set of failure kinds carried in error responses."""

    ACCESS_DENIED = "access_denied"
    PARENT_NOT_FOUND = "parent_not_found"
    NO_MATCH_FOUND = "no_match_found"
    NO_HISTORY = "no_history"
    INVALID_ARGUMENT = "invalid_argument"

    # Pass-through filesystem faults, converted at the tool boundary
    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    NOT_A_FILE = "not_a_file"
    OS_ERROR = "os_error"


class EditorError(Exception):
    """Base exception for all text editor errors.

    This is the root of the exception hierarchy. All custom exceptions
    should inherit from this class.
    """

    pass


class RootValidationError(EditorError):
    """One or more allowed directories are missing or not directories.

    Raised at startup only. Carries every problem found so the CLI can
    report them together before exiting.

    Attributes:
        problems: Human-readable description of each invalid root
    """

    def __init__(self, problems: list[str]):
        """Initialize RootValidationError.

        Args:
            problems: Human-readable description of each invalid root
        """
        self.problems = problems
        super().__init__("; ".join(problems))
