"""Base class for editor toolsets.

This module provides the abstract base class for creating toolsets. Toolsets
encapsulate related tools with shared dependencies, avoiding global state and
enabling dependency injection for testing.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from text_editor.config.schema import EditorSettings
from text_editor.exceptions import ErrorKind
from text_editor.utils.responses import create_error_response, create_success_response


class EditorToolset(ABC):
    """Base class for editor toolsets.

    Each toolset receives an EditorSettings instance with all necessary
    configuration, making it easy to build isolated instances in tests.

    Example:
        >>> class MyTools(EditorToolset):
        ...     def get_tools(self):
        ...         return [self.my_tool]
        ...
        ...     async def my_tool(self, arg: str) -> dict:
        ...         return self._create_success_response(
        ...             result=f"Processed: {arg}",
        ...             message="Tool executed successfully"
        ...         )
    """

    def __init__(self, settings: EditorSettings):
        """Initialize toolset with configuration.

        Args:
            settings: Editor settings with allowed directories and limits
        """
        self.settings = settings

    @abstractmethod
    def get_tools(self) -> list[Callable]:
        """Get list of tool functions.

        Subclasses must implement this method to return their tool functions.
        Tools should be async callables with proper type hints and docstrings
        for LLM consumption.

        Returns:
            List of callable tool functions
        """
        pass

    def _create_success_response(self, result: Any, message: str = "") -> dict:
        """Create standardized success response.

        Args:
            result: Tool execution result (usually text for the caller)
            message: Optional success message for logging/display

        Returns:
            Structured response dict with success=True
        """
        return create_success_response(result, message)

    def _create_error_response(self, error: ErrorKind | str, message: str) -> dict:
        """Create standardized error response.

        Tools should use this when they encounter errors rather than raising
        exceptions.

        Args:
            error: Error kind from ``ErrorKind``
            message: Human-friendly error message

        Returns:
            Structured response dict with success=False
        """
        return create_error_response(error, message)
