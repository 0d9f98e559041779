"""Test helpers and utilities.

This module provides shared utilities for testing:
- assertions: Custom assertions for response dicts and rendered diffs
"""

from tests.helpers.assertions import (
    assert_error_response,
    assert_fenced_diff,
    assert_success_response,
)

__all__ = [
    "assert_success_response",
    "assert_error_response",
    "assert_fenced_diff",
]
