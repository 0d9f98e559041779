"""CLI entry point for the text editor."""

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

import typer

from text_editor import __version__
from text_editor.cli.constants import ExitCodes
from text_editor.cli.session import setup_session_logging
from text_editor.cli.utils import get_console, print_error, print_output
from text_editor.config import ConfigurationError, ensure_valid_roots, load_settings
from text_editor.exceptions import RootValidationError
from text_editor.tools import TextEditorTools
from text_editor.utils.responses import render_tool_output

app = typer.Typer(help="Text Editor - sandboxed file editing with diffs and undo")

console = get_console()

logger = logging.getLogger(__name__)


def _get_tools(ctx: typer.Context) -> TextEditorTools:
    return ctx.obj


def _report(response: dict) -> None:
    """Print a tool response and exit non-zero if it failed."""
    print_output(console, render_tool_output(response))
    if not response["success"]:
        raise typer.Exit(ExitCodes.GENERAL_ERROR)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    root: list[Path] = typer.Option(
        None, "--root", "-r", help="Allowed directory (repeat for several)"
    ),
    config: Path = typer.Option(
        None, "--config", help="Settings file (default ~/.text-editor/settings.json)"
    ),
    version_flag: bool = typer.Option(False, "--version", help="Show version"),
) -> None:
    """Text Editor - sandboxed file editing with diffs and undo.

    \b
    Examples:
        text-editor --root . view README.md --start 1 --end 20
        text-editor --root . edit app.py --old "DEBUG = True" --new "DEBUG = False"
        text-editor --root . insert app.py 0 "#!/usr/bin/env python"
        text-editor --root . batch requests.jsonl
    """
    if version_flag:
        console.print(f"Text Editor version {__version__}")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        print_output(console, ctx.get_help())
        return

    try:
        settings = load_settings(config, extra_directories=[str(r) for r in root or []])
    except ConfigurationError as e:
        print_error(console, f"Configuration error: {e}")
        raise typer.Exit(ExitCodes.GENERAL_ERROR)

    try:
        ensure_valid_roots(settings)
    except RootValidationError as e:
        for problem in e.problems:
            print_error(console, problem)
        raise typer.Exit(ExitCodes.GENERAL_ERROR)

    log_file = setup_session_logging(settings)
    logger.info(f"Allowed directories: {settings.allowed_directories} (log: {log_file})")

    ctx.obj = TextEditorTools(settings)


@app.command()
def edit(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="File to edit"),
    old: str = typer.Option(None, "--old", help="Text to replace"),
    new: str = typer.Option(None, "--new", help="Replacement text"),
    edits_file: Path = typer.Option(
        None, "--edits", help='JSON file with a list of {"oldText", "newText"} edits'
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show the diff without writing"),
) -> None:
    """Replace text in a file and print the diff."""
    if edits_file is not None:
        try:
            edits: list[Any] = json.loads(edits_file.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            print_error(console, f"Could not read edits from {edits_file}: {e}")
            raise typer.Exit(ExitCodes.GENERAL_ERROR)
    elif old is not None and new is not None:
        edits = [{"oldText": old, "newText": new}]
    else:
        print_error(console, "Provide --old and --new, or --edits FILE")
        raise typer.Exit(ExitCodes.GENERAL_ERROR)

    tools = _get_tools(ctx)
    _report(asyncio.run(tools.edit_file(path, edits, dry_run=dry_run)))


@app.command()
def insert(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="File to insert into"),
    line: int = typer.Argument(..., help="Line after which to insert (0 for beginning)"),
    text: str = typer.Argument(..., help="Text to insert"),
) -> None:
    """Insert text after a line and print the diff."""
    tools = _get_tools(ctx)
    _report(asyncio.run(tools.insert(path, line, text)))


@app.command()
def view(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="File to view"),
    start: int = typer.Option(None, "--start", help="First line (1-indexed)"),
    end: int = typer.Option(None, "--end", help="Last line, inclusive (-1 for end of file)"),
) -> None:
    """Print a file, or a range of its lines."""
    view_range = None
    if start is not None or end is not None:
        view_range = [start if start is not None else 1, end if end is not None else -1]

    tools = _get_tools(ctx)
    _report(asyncio.run(tools.view(path, view_range)))


@app.command()
def create(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="File to create"),
    content: str = typer.Option("", "--content", help="File content"),
) -> None:
    """Create or overwrite a file."""
    tools = _get_tools(ctx)
    _report(asyncio.run(tools.create(path, content)))


@app.command()
def undo(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="File to revert"),
) -> None:
    """Revert the last edit made to a file in this process."""
    tools = _get_tools(ctx)
    _report(asyncio.run(tools.undo_edit(path)))


@app.command()
def roots(ctx: typer.Context) -> None:
    """List the allowed directories."""
    tools = _get_tools(ctx)
    for directory in tools.guard.allowed_directories:
        print_output(console, directory)


async def _run_batch(tools: TextEditorTools, lines: list[str]) -> bool:
    """Run JSON-lines tool requests in order against one toolset.

    Returns:
        True if every request succeeded
    """
    registry = {tool.__name__: tool for tool in tools.get_tools()}
    all_ok = True

    for number, line in enumerate(lines, start=1):
        if not line.strip():
            continue

        try:
            request = json.loads(line)
            name = request["tool"]
            arguments = request.get("arguments", {})
        except (json.JSONDecodeError, KeyError, TypeError, AttributeError) as e:
            print_output(console, f"Error: line {number}: invalid request: {e}")
            all_ok = False
            continue

        tool = registry.get(name)
        if tool is None:
            print_output(console, f"Error: line {number}: unknown tool: {name}")
            all_ok = False
            continue

        try:
            response = await tool(**arguments)
        except TypeError as e:
            print_output(console, f"Error: line {number}: invalid arguments for {name}: {e}")
            all_ok = False
            continue
        except Exception as e:
            logger.exception(f"Request on line {number} ({name}) failed")
            print_output(console, f"Error: line {number}: {name} failed: {e}")
            all_ok = False
            continue

        print_output(console, render_tool_output(response))
        all_ok = all_ok and response["success"]

    return all_ok


@app.command()
def batch(
    ctx: typer.Context,
    requests_file: Path = typer.Argument(
        None, help="JSON-lines file of requests (reads stdin if omitted)"
    ),
) -> None:
    """Run {"tool": ..., "arguments": {...}} requests, one per line.

    All requests share one undo history, so a later ``undo_edit`` can revert
    an earlier edit from the same batch.
    """
    if requests_file is None:
        lines = sys.stdin.read().splitlines()
    else:
        try:
            lines = requests_file.read_text(encoding="utf-8").splitlines()
        except OSError as e:
            print_error(console, f"Could not read {requests_file}: {e}")
            raise typer.Exit(ExitCodes.GENERAL_ERROR)

    tools = _get_tools(ctx)
    try:
        all_ok = asyncio.run(_run_batch(tools, lines))
    except KeyboardInterrupt:
        raise typer.Exit(ExitCodes.INTERRUPTED)

    if not all_ok:
        raise typer.Exit(ExitCodes.GENERAL_ERROR)


if __name__ == "__main__":
    app()
