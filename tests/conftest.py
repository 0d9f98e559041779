"""Shared test fixtures for all tests.

Every test gets an isolated ``workspace`` directory (the only allowed root)
next to an ``outside`` directory that the sandbox must never reach.
"""

import pytest

from text_editor.config.schema import EditorSettings
from text_editor.core.history import HistoryStore
from text_editor.core.paths import PathGuard, ResolvedPath
from text_editor.tools.editor import TextEditorTools

EDITOR_ENV_VARS = [
    "TEXT_EDITOR_ALLOWED_DIRS",
    "TEXT_EDITOR_HISTORY_LIMIT",
    "TEXT_EDITOR_SERIALIZE_EDITS",
    "TEXT_EDITOR_LOG_LEVEL",
    "TEXT_EDITOR_DATA_DIR",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_editor_env(monkeypatch):
    """Keep the developer's environment out of configuration tests."""
    for name in EDITOR_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def workspace(tmp_path):
    """Create the allowed root for each test.

    Returns:
        Path: Temporary directory used as the only allowed directory
    """
    workspace = tmp_path / "workspace"
    workspace.mkdir()
    return workspace


@pytest.fixture
def outside(tmp_path):
    """Create a directory next to the workspace that is not allowed."""
    outside = tmp_path / "outside"
    outside.mkdir()
    (outside / "secret.txt").write_text("top secret\n")
    return outside


@pytest.fixture
def settings(workspace, tmp_path):
    """Create EditorSettings confined to the workspace."""
    return EditorSettings(
        allowed_directories=[str(workspace)],
        data_dir=str(tmp_path / "data"),
    )


@pytest.fixture
def guard(workspace):
    """Create a PathGuard for the workspace."""
    return PathGuard([str(workspace)])


@pytest.fixture
def history():
    """Create an empty HistoryStore with the default limit."""
    return HistoryStore()


@pytest.fixture
def resolve(guard):
    """Resolve a path through the guard, failing the test on denial."""

    def _resolve(path) -> ResolvedPath:
        resolved = guard.resolve(str(path))
        assert isinstance(resolved, ResolvedPath), f"Expected ResolvedPath, got {resolved}"
        return resolved

    return _resolve


@pytest.fixture
def editor_tools(settings):
    """Create TextEditorTools confined to the workspace."""
    return TextEditorTools(settings)
