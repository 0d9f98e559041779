"""Shared response helper functions for the core and the tool boundary.

This module provides the standardized response format used across the
editor. Core operations return these dicts instead of raising, so the
caller can branch on the ``error`` kind.
"""

from typing import Any

from text_editor.exceptions import ErrorKind


def create_success_response(result: Any, message: str = "") -> dict:
    """Create standardized success response.

    Args:
        result: Operation result (usually the fenced diff text)
        message: Optional success message for logging/display

    Returns:
        Structured response dict with success=True

    Example:
        >>> create_success_response(result="```diff\\n...", message="Applied 1 edit")
        {'success': True, 'result': '```diff\\n...', 'message': 'Applied 1 edit'}
    """
    return {
        "success": True,
        "result": result,
        "message": message,
    }


def create_error_response(error: ErrorKind | str, message: str) -> dict:
    """Create standardized error response.

    Args:
        error: Error kind (an ``ErrorKind`` member or its string value)
        message: Human-friendly error message

    Returns:
        Structured response dict with success=False

    Example:
        >>> create_error_response(ErrorKind.NO_HISTORY, "No edit history available for a.txt")
        {'success': False, 'error': 'no_history', 'message': 'No edit history available for a.txt'}
    """
    return {
        "success": False,
        "error": ErrorKind(error).value,
        "message": message,
    }


def is_error(response: Any) -> bool:
    """Return True if ``response`` is an error response dict."""
    return isinstance(response, dict) and response.get("success") is False


def render_tool_output(response: dict) -> str:
    """Render a response as the text handed back to the calling agent.

    Successful responses render as their result text. Failures render as a
    plain ``Error: <message>`` string; the dispatch layer flags the reply as
    an error without altering this text.

    Args:
        response: Success or error response dict

    Returns:
        Caller-visible text
    """
    if response.get("success"):
        result = response.get("result")
        return "" if result is None else str(result)
    return f"Error: {response.get('message', 'unknown error')}"
