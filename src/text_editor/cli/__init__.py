"""Command-line interface for the text editor."""

from text_editor.cli.app import app

__all__ = ["app"]
