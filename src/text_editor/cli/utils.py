"""Utility functions for CLI module."""

import locale
import os
import platform
import sys

from rich.console import Console
from rich.markup import escape


def get_console() -> Console:
    """Create Rich console with proper encoding for Windows.

    On Windows in non-interactive mode (subprocess, pipe, etc.), the default
    encoding is often CP1252 which cannot render the diffs of non-ASCII files.
    This function detects such cases and forces UTF-8 encoding when possible.

    Returns:
        Console: Configured Rich console instance
    """
    if platform.system() == "Windows" and not sys.stdout.isatty():
        encoding = locale.getpreferredencoding() or ""
        if "utf" not in encoding.lower():
            os.environ["PYTHONIOENCODING"] = "utf-8"
            return Console(force_terminal=True, legacy_windows=False)
    return Console()


def print_output(console: Console, text: str) -> None:
    """Print tool output verbatim.

    Markup, highlighting and emoji codes are disabled so file contents and
    diffs reach the terminal byte for byte, and long lines are not wrapped.

    Args:
        console: Rich console to print to
        text: Rendered tool output
    """
    console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True, end="")
    if not text.endswith("\n"):
        console.print(markup=False, soft_wrap=True)


def print_error(console: Console, message: str) -> None:
    """Print an error message in red without wrapping or markup in ``message``."""
    console.print(f"[red]{escape(message)}[/red]", soft_wrap=True)
