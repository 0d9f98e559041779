"""Tool implementations for the text editor."""

from text_editor.tools.editor import TextEditorTools
from text_editor.tools.toolset import EditorToolset

__all__ = ["EditorToolset", "TextEditorTools"]
