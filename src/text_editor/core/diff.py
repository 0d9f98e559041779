"""Unified diff rendering and fencing.

Diffs are returned to the caller inside a backtick fence. The fence is
always longer than the longest backtick run in the diff body, so content
inside the diff can never close it early.
"""

import difflib

NO_NEWLINE_MARKER = "\\ No newline at end of file"
SEPARATOR = "=" * 67
FENCE_CHAR = "`"
MIN_FENCE_LENGTH = 3


def normalize_line_endings(text: str) -> str:
    """Convert ``\\r\\n`` line endings to ``\\n``."""
    return text.replace("\r\n", "\n")


def _split_lines(text: str) -> list[str]:
    # str.splitlines() would also break on form feeds and unicode separators
    lines = text.split("\n")
    result = [line + "\n" for line in lines[:-1]]
    if lines[-1]:
        result.append(lines[-1])
    return result


def create_unified_diff(before: str, after: str, label: str = "file") -> str:
    """Build a unified diff from ``before`` to ``after``.

    Both sides use ``label`` as the file name, tagged ``original`` and
    ``modified``, below a separator line of ``=`` characters. A final line
    without a trailing newline is followed by the standard
    ``\\ No newline at end of file`` marker.

    Args:
        before: Original text
        after: Modified text
        label: File identifier shown in the ``---``/``+++`` headers

    Returns:
        Diff text ending with a newline; separator and headers only if
        nothing changed
    """
    before_lines = _split_lines(normalize_line_endings(before))
    after_lines = _split_lines(normalize_line_endings(after))

    diff_lines = list(
        difflib.unified_diff(
            before_lines,
            after_lines,
            fromfile=label,
            tofile=label,
            fromfiledate="original",
            tofiledate="modified",
        )
    )
    if not diff_lines:
        diff_lines = [f"--- {label}\toriginal\n", f"+++ {label}\tmodified\n"]

    output = [SEPARATOR + "\n"]
    for line in diff_lines:
        if line.endswith("\n"):
            output.append(line)
        else:
            output.append(line + "\n")
            output.append(NO_NEWLINE_MARKER + "\n")
    return "".join(output)


def fence_length(body: str, char: str = FENCE_CHAR) -> int:
    """Smallest fence length (at least 3) whose run of ``char`` is absent from ``body``."""
    length = MIN_FENCE_LENGTH
    while char * length in body:
        length += 1
    return length


def fence_diff(diff: str) -> str:
    """Wrap ``diff`` in a ``diff``-tagged fence that ``diff`` cannot close."""
    fence = FENCE_CHAR * fence_length(diff)
    if not diff.endswith("\n"):
        diff += "\n"
    return f"{fence}diff\n{diff}{fence}\n\n"


def format_diff(before: str, after: str, label: str = "file", note: str = "") -> str:
    """Render the fenced unified diff from ``before`` to ``after``.

    Args:
        before: Original text
        after: Modified text
        label: File identifier for the diff headers
        note: Optional text appended after the fenced block

    Returns:
        Fenced diff, followed by ``note`` if given
    """
    return fence_diff(create_unified_diff(before, after, label)) + note
