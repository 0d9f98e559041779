"""Unit tests for text_editor.cli module."""

import json
from unittest.mock import patch

import pytest
import typer
from typer.testing import CliRunner

from text_editor.cli import app


@pytest.fixture
def cli(workspace, tmp_path):
    """Invoke the CLI with the workspace as the only root.

    Session logging is patched out so tests never reconfigure the root
    logger or write under the home directory.
    """
    runner = CliRunner()
    config_path = tmp_path / "no-settings.json"

    def invoke(*args: str, input: str | None = None, roots: list | None = None):
        root_args: list[str] = []
        for root in [workspace] if roots is None else roots:
            root_args += ["--root", str(root)]
        with patch("text_editor.cli.app.setup_session_logging", return_value="session.log"):
            return runner.invoke(
                app, [*root_args, "--config", str(config_path), *args], input=input
            )

    return invoke


@pytest.fixture
def sample_file(workspace):
    """Create a small file in the workspace."""
    target = workspace / "notes.txt"
    target.write_text("alpha\nbeta\ngamma\n")
    return target


@pytest.mark.unit
@pytest.mark.cli
class TestCLIFramework:
    """Tests for CLI framework and structure."""

    def test_app_is_typer_instance(self):
        """Test that CLI app is a Typer instance."""
        assert isinstance(app, typer.Typer)

    def test_help_lists_commands(self):
        """Test --help shows every command."""
        result = CliRunner().invoke(app, ["--help"])

        assert result.exit_code == 0
        for command in ("edit", "insert", "view", "create", "undo", "roots", "batch"):
            assert command in result.output

    def test_version_flag(self):
        """Test --version prints the version."""
        result = CliRunner().invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "Text Editor version" in result.output


@pytest.mark.unit
@pytest.mark.cli
class TestRootValidation:
    """Tests for startup validation of allowed directories."""

    def test_missing_root_exits_with_error(self, cli, tmp_path):
        """Test a root that does not exist stops startup."""
        result = cli("roots", roots=[tmp_path / "missing"])

        assert result.exit_code == 1
        assert "does not exist" in result.output

    def test_no_roots_exits_with_error(self, cli):
        """Test running without any root stops startup."""
        result = cli("roots", roots=[])

        assert result.exit_code == 1
        assert "No allowed directories" in result.output

    def test_roots_lists_directories(self, cli, workspace):
        """Test the roots command prints the allowed directories."""
        result = cli("roots")

        assert result.exit_code == 0
        assert str(workspace) in result.output


@pytest.mark.unit
@pytest.mark.cli
class TestCommands:
    """Tests for single-shot commands."""

    def test_edit(self, cli, sample_file):
        """Test edit writes the file and prints the diff."""
        result = cli("edit", str(sample_file), "--old", "beta", "--new", "BETA")

        assert result.exit_code == 0
        assert "```diff" in result.output
        assert "+BETA" in result.output
        assert sample_file.read_text() == "alpha\nBETA\ngamma\n"

    def test_edit_dry_run(self, cli, sample_file):
        """Test --dry-run prints the diff without writing."""
        result = cli("edit", str(sample_file), "--old", "beta", "--new", "BETA", "--dry-run")

        assert result.exit_code == 0
        assert "+BETA" in result.output
        assert sample_file.read_text() == "alpha\nbeta\ngamma\n"

    def test_edit_from_edits_file(self, cli, sample_file, tmp_path):
        """Test --edits reads a JSON list of edits."""
        edits_path = tmp_path / "edits.json"
        edits_path.write_text(
            json.dumps(
                [
                    {"oldText": "alpha", "newText": "one"},
                    {"oldText": "gamma", "newText": "three"},
                ]
            )
        )

        result = cli("edit", str(sample_file), "--edits", str(edits_path))

        assert result.exit_code == 0
        assert sample_file.read_text() == "one\nbeta\nthree\n"

    def test_edit_requires_old_and_new(self, cli, sample_file):
        """Test edit without edits exits with an error."""
        result = cli("edit", str(sample_file), "--old", "beta")

        assert result.exit_code == 1

    def test_edit_no_match(self, cli, sample_file):
        """Test a failed match prints the error and exits 1."""
        result = cli("edit", str(sample_file), "--old", "delta", "--new", "x")

        assert result.exit_code == 1
        assert "Error: Could not find exact match for edit:" in result.output

    def test_edit_outside_root(self, cli, outside):
        """Test paths outside the roots are denied."""
        result = cli("edit", str(outside / "secret.txt"), "--old", "top", "--new", "x")

        assert result.exit_code == 1
        assert "Access denied" in result.output
        assert (outside / "secret.txt").read_text() == "top secret\n"

    def test_insert(self, cli, sample_file):
        """Test insert prepends at line 0."""
        result = cli("insert", str(sample_file), "0", "header")

        assert result.exit_code == 0
        assert sample_file.read_text() == "header\nalpha\nbeta\ngamma\n"

    def test_view_range(self, cli, sample_file):
        """Test view prints the requested lines."""
        result = cli("view", str(sample_file), "--start", "2", "--end", "2")

        assert result.exit_code == 0
        assert result.output.strip() == "beta"

    def test_create(self, cli, workspace):
        """Test create writes a new file."""
        target = workspace / "new.txt"

        result = cli("create", str(target), "--content", "hello")

        assert result.exit_code == 0
        assert target.read_text() == "hello"

    def test_undo_has_no_history_in_a_new_process(self, cli, sample_file):
        """Test history does not outlive a single invocation."""
        cli("edit", str(sample_file), "--old", "beta", "--new", "BETA")

        result = cli("undo", str(sample_file))

        assert result.exit_code == 1
        assert "No edit history available" in result.output


@pytest.mark.unit
@pytest.mark.cli
class TestBatch:
    """Tests for JSON-lines batches."""

    def test_edit_then_undo_in_one_batch(self, cli, sample_file):
        """Test requests in one batch share the undo history."""
        requests = [
            {
                "tool": "str_replace",
                "arguments": {"path": str(sample_file), "old_str": "beta", "new_str": "B"},
            },
            {"tool": "undo_edit", "arguments": {"path": str(sample_file)}},
        ]
        stdin = "\n".join(json.dumps(r) for r in requests) + "\n"

        result = cli("batch", input=stdin)

        assert result.exit_code == 0
        assert "Reverted to previous version." in result.output
        assert sample_file.read_text() == "alpha\nbeta\ngamma\n"

    def test_batch_from_file(self, cli, sample_file, tmp_path):
        """Test requests can be read from a file."""
        requests_path = tmp_path / "requests.jsonl"
        requests_path.write_text(
            json.dumps(
                {
                    "tool": "edit_file",
                    "arguments": {
                        "path": str(sample_file),
                        "edits": [{"oldText": "gamma", "newText": "GAMMA"}],
                    },
                }
            )
            + "\n"
        )

        result = cli("batch", str(requests_path))

        assert result.exit_code == 0
        assert sample_file.read_text() == "alpha\nbeta\nGAMMA\n"

    def test_failures_reported_per_line(self, cli, sample_file):
        """Test bad requests are reported and the batch exits 1."""
        lines = [
            "not json",
            json.dumps({"tool": "delete_everything", "arguments": {}}),
            json.dumps({"tool": "view", "arguments": {"nope": 1}}),
            json.dumps({"tool": "view", "arguments": {"path": str(sample_file)}}),
        ]

        result = cli("batch", input="\n".join(lines) + "\n")

        assert result.exit_code == 1
        assert "line 1: invalid request" in result.output
        assert "line 2: unknown tool: delete_everything" in result.output
        assert "line 3: invalid arguments for view" in result.output
        assert "alpha\nbeta\ngamma\n" in result.output

    def test_unresolvable_path_does_not_stop_batch(self, cli, workspace, sample_file):
        """Test a symlink cycle is reported and later requests still run."""
        (workspace / "a").symlink_to(workspace / "b")
        (workspace / "b").symlink_to(workspace / "a")
        lines = [
            json.dumps({"tool": "view", "arguments": {"path": str(workspace / "a")}}),
            json.dumps({"tool": "view", "arguments": {"path": str(sample_file)}}),
        ]

        result = cli("batch", input="\n".join(lines) + "\n")

        assert result.exit_code == 1
        assert "Error: Failed to resolve path" in result.output
        assert "alpha\nbeta\ngamma\n" in result.output
