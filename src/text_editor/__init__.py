"""Text Editor - sandboxed file editing with diffs, fuzzy patching and undo."""

from importlib.metadata import PackageNotFoundError, version

# Read version from package metadata (pyproject.toml)
try:
    __version__ = version("text-editor")
except PackageNotFoundError:
    # Fallback for development environments where package isn't installed
    __version__ = "0.0.0.dev"

from text_editor.config import EditorSettings
from text_editor.exceptions import ErrorKind
from text_editor.tools import TextEditorTools

__all__ = ["EditorSettings", "ErrorKind", "TextEditorTools", "__version__"]
