"""Tests for FileSignCompleter."""

import os

import pytest
from prompt_toolkit.document import Document

from cli.completer import FileSignCompleter
from cli.constants import COMMANDS


@pytest.fixture
def completer():
    """Create a FileSignCompleter instance."""
    return FileSignCompleter()


@pytest.fixture
def workspace(tmp_path):
    """
    Create a directory with files, a subdirectory and a hidden file.

    Returns:
        Path to the temporary directory
    """
    (tmp_path / "report.txt").write_text("content")
    (tmp_path / "readme.md").write_text("content")
    (tmp_path / "results").mkdir()
    (tmp_path / ".hidden").write_text("content")
    return tmp_path


def get_completions_list(completer, text):
    """Helper to get list of completion texts from completer."""
    doc = Document(text, len(text))
    return [c.text for c in completer.get_completions(doc, None)]


class TestCommandCompletion:
    """Tests for command name completion."""

    def test_empty_input_shows_all_commands(self, completer):
        """Empty input should suggest all commands."""
        completions = get_completions_list(completer, "")
        for cmd in COMMANDS:
            assert cmd in completions

    def test_partial_command_filters(self, completer):
        """Partial command should filter to matching commands."""
        completions = get_completions_list(completer, "ver")
        assert "verify" in completions
        assert "verify-record" in completions
        assert "add" not in completions

    def test_command_completion_case_insensitive(self, completer):
        """Command completion should be case insensitive."""
        assert "download" in get_completions_list(completer, "DOWN")


class TestPathCompletion:
    """Tests for local path completion."""

    def test_add_lists_matching_entries(self, completer, workspace):
        """'add' completes files and directories under the typed prefix."""
        prefix = str(workspace) + os.sep + "re"
        completions = get_completions_list(completer, f"add {prefix}")

        assert os.path.join(str(workspace), "report.txt") in completions
        assert os.path.join(str(workspace), "readme.md") in completions
        assert os.path.join(str(workspace), "results") + os.sep in completions

    def test_hidden_entries_skipped(self, completer, workspace):
        """Hidden entries are only offered when the prefix starts with a dot."""
        base = str(workspace) + os.sep
        assert os.path.join(str(workspace), ".hidden") not in get_completions_list(completer, f"add {base}")
        assert os.path.join(str(workspace), ".hidden") in get_completions_list(completer, f"add {base}.")

    def test_set_path_offers_directories_only(self, completer, workspace):
        """'set-path' completes directories only."""
        prefix = str(workspace) + os.sep + "re"
        completions = get_completions_list(completer, f"set-path {prefix}")

        assert completions == [os.path.join(str(workspace), "results") + os.sep]

    def test_no_completion_for_cid_commands(self, completer):
        """Commands taking a CID get no path completion."""
        assert get_completions_list(completer, "info ") == []
        assert get_completions_list(completer, "verify Qm") == []

    def test_no_completion_after_first_argument(self, completer, workspace):
        """Path completion stops after the single argument."""
        assert get_completions_list(completer, f"add {workspace} ") == []

    def test_missing_directory_yields_nothing(self, completer, tmp_path):
        """A prefix inside a missing directory yields no completions."""
        missing = str(tmp_path / "missing" / "fi")
        assert get_completions_list(completer, f"add {missing}") == []
