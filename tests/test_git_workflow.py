"""Tests for git rename detection (subprocess mocked)."""

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from cloud_glue import is_file_renamed, list_renamed_files
from cloud_glue.git_workflow import parse_renamed_files

DIFF_OUTPUT = (
    "M\tREADME.md\n"
    "R100\tdocs/old.md\tdocs/new.md\n"
    "R087\tsrc/a.py\tsrc/b.py\n"
    "A\tadded.txt\n"
    "R100\tbroken-line\n"
    "\n"
)


def _completed(stdout: str) -> MagicMock:
    return MagicMock(stdout=stdout, returncode=0)


class TestParseRenamedFiles:
    def test_collects_new_paths_of_rename_lines(self):
        assert parse_renamed_files(DIFF_OUTPUT) == ["docs/new.md", "src/b.py"]

    def test_no_renames(self):
        assert parse_renamed_files("M\ta.txt\nD\tb.txt\n") == []
        assert parse_renamed_files("") == []


class TestListRenamedFiles:
    def test_runs_git_diff_in_repository(self):
        with patch("cloud_glue.git_workflow.subprocess.run", return_value=_completed(DIFF_OUTPUT)) as run:
            assert list_renamed_files("/repo") == ["docs/new.md", "src/b.py"]
        run.assert_called_once()
        assert run.call_args[0][0] == ["git", "diff", "--name-status", "HEAD~1", "HEAD"]
        assert run.call_args[1]["cwd"] == "/repo"
        assert run.call_args[1]["check"] is True

    def test_empty_repository_path_raises(self):
        with pytest.raises(ValueError, match="cannot be empty"):
            list_renamed_files("")

    def test_git_failure_propagates(self):
        error = subprocess.CalledProcessError(128, ["git"], stderr="fatal: bad revision 'HEAD~1'")
        with patch("cloud_glue.git_workflow.subprocess.run", side_effect=error):
            with pytest.raises(subprocess.CalledProcessError):
                list_renamed_files("/repo")

    def test_is_file_renamed(self):
        with patch("cloud_glue.git_workflow.subprocess.run", return_value=_completed(DIFF_OUTPUT)):
            assert is_file_renamed("/repo", "docs/new.md") is True
            assert is_file_renamed("/repo", "docs/old.md") is False
            assert is_file_renamed("/repo", "README.md") is False
