"""Utility modules for the text editor."""

from text_editor.utils.responses import (
    create_error_response,
    create_success_response,
    is_error,
    render_tool_output,
)

__all__ = [
    "create_success_response",
    "create_error_response",
    "is_error",
    "render_tool_output",
]
