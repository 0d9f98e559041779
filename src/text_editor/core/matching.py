"""Edit matching strategies.

An edit's old text is located in two passes:

1. Exact: the first literal occurrence of the old text is replaced.
2. Fuzzy: only when no literal occurrence exists, the old text is compared
   line by line against a sliding window of buffer lines, ignoring leading
   and trailing whitespace on each line. The lowest matching window wins.

A fuzzy replacement is re-indented so the new block sits at the
indentation of the matched block.
"""

import logging
import re
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from text_editor.core.diff import normalize_line_endings

logger = logging.getLogger(__name__)

_LEADING_WHITESPACE = re.compile(r"^\s*")


class Edit(BaseModel):
    """One (old text, new text) replacement."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    old_text: str = Field(alias="oldText", description="Text to search for")
    new_text: str = Field(alias="newText", description="Text to replace it with")


class MatchStrategy(Enum):
    """Which pass located an edit's old text."""

    EXACT = "exact"
    FUZZY = "fuzzy"


def leading_whitespace(line: str) -> str:
    """Return the leading whitespace run of ``line`` (possibly empty)."""
    match = _LEADING_WHITESPACE.match(line)
    return match.group(0) if match else ""


def replace_exact(buffer: str, old_text: str, new_text: str) -> str | None:
    """Replace the first literal occurrence of ``old_text``.

    Returns:
        New buffer, or None if ``old_text`` does not occur in ``buffer``
    """
    if old_text not in buffer:
        return None
    return buffer.replace(old_text, new_text, 1)


def find_fuzzy_window(buffer_lines: list[str], old_lines: list[str]) -> int | None:
    """Find the first window of ``buffer_lines`` equal to ``old_lines`` after trimming.

    Interior whitespace must match exactly; only leading and trailing
    whitespace of each line is ignored. No scoring: the lowest index wins.

    Returns:
        Start index of the matching window, or None
    """
    window = len(old_lines)
    stripped_old = [line.strip() for line in old_lines]
    for start in range(len(buffer_lines) - window + 1):
        if all(
            buffer_lines[start + offset].strip() == expected
            for offset, expected in enumerate(stripped_old)
        ):
            return start
    return None


def reindent(new_text: str, old_lines: list[str], original_indent: str) -> list[str]:
    """Re-indent replacement lines relative to the matched block.

    The first line takes ``original_indent``. Each later line that has a
    counterpart in ``old_lines`` keeps its indentation relative to that
    counterpart, rebased onto ``original_indent`` (never dedenting below it).
    Lines past the end of the old block, and blank lines, are kept unchanged.

    Args:
        new_text: Normalized replacement text
        old_lines: Lines of the normalized old text
        original_indent: Leading whitespace of the first matched buffer line

    Returns:
        Replacement lines
    """
    result = []
    for index, line in enumerate(new_text.split("\n")):
        if index == 0:
            result.append(original_indent + line.lstrip())
            continue
        if index >= len(old_lines) or not line.strip():
            result.append(line)
            continue
        delta = len(leading_whitespace(line)) - len(leading_whitespace(old_lines[index]))
        result.append(original_indent + " " * max(0, delta) + line.lstrip())
    return result


def replace_fuzzy(buffer: str, old_text: str, new_text: str) -> str | None:
    """Replace the first whitespace-insensitive window match of ``old_text``.

    Returns:
        New buffer, or None if no window matches
    """
    old_lines = old_text.split("\n")
    buffer_lines = buffer.split("\n")

    start = find_fuzzy_window(buffer_lines, old_lines)
    if start is None:
        return None

    original_indent = leading_whitespace(buffer_lines[start])
    buffer_lines[start : start + len(old_lines)] = reindent(new_text, old_lines, original_indent)
    return "\n".join(buffer_lines)


def apply_edit(buffer: str, edit: Edit) -> tuple[str, MatchStrategy] | None:
    """Apply one edit, exact match first and fuzzy match as a fallback.

    The fuzzy pass never runs when the old text occurs literally, even if a
    whitespace-insensitive window also matches elsewhere.

    Args:
        buffer: Normalized buffer
        edit: Edit to apply; both sides are normalized here

    Returns:
        (new buffer, strategy used), or None if neither pass matched
    """
    old_text = normalize_line_endings(edit.old_text)
    new_text = normalize_line_endings(edit.new_text)

    replaced = replace_exact(buffer, old_text, new_text)
    if replaced is not None:
        return replaced, MatchStrategy.EXACT

    replaced = replace_fuzzy(buffer, old_text, new_text)
    if replaced is not None:
        return replaced, MatchStrategy.FUZZY

    return None
