"""Tests for the command-line interface."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from release_bump import __version__
from release_bump.cli.app import app
from release_bump.vcs.git import Commit
from tests.conftest import FakeExecutor, git_log_output

runner = CliRunner()


@pytest.fixture
def cli_executor(fake_executor: FakeExecutor):
    fake_executor.respond(
        ["git", "--no-pager", "log"],
        git_log_output([Commit("abc123", "Add foo"), Commit("def456", "Merge branch x")]),
    )
    with patch(
        "release_bump.cli.commands.bump.SubprocessExecutor",
        return_value=fake_executor,
    ):
        yield fake_executor


class TestBumpCommand:
    """Tests for `release-bump bump`."""

    def test_bump_minor(self, temp_project: Path, cli_executor: FakeExecutor):
        result = runner.invoke(app, ["bump", "minor", "--path", str(temp_project)])

        assert result.exit_code == 0, result.output
        assert "1.3.0" in result.output
        assert "## 1.3.0 (" in (temp_project / "CHANGELOG.md").read_text()
        assert cli_executor.commands("git", "tag")

    def test_invalid_kind(self, temp_project: Path, cli_executor: FakeExecutor):
        before = (temp_project / "CHANGELOG.md").read_text()

        result = runner.invoke(app, ["bump", "banana", "--path", str(temp_project)])

        assert result.exit_code == 1
        assert "Invalid release type: banana" in result.output
        assert cli_executor.calls == []
        assert (temp_project / "CHANGELOG.md").read_text() == before

    def test_missing_kind(self, temp_project: Path):
        result = runner.invoke(app, ["bump", "--path", str(temp_project)])

        assert result.exit_code == 2

    def test_dry_run(self, temp_project: Path, cli_executor: FakeExecutor):
        before = (temp_project / "CHANGELOG.md").read_text()

        result = runner.invoke(app, ["bump", "patch", "--dry-run", "--path", str(temp_project)])

        assert result.exit_code == 0, result.output
        assert "Dry Run Preview" in result.output
        assert (temp_project / "CHANGELOG.md").read_text() == before

    def test_already_released(self, temp_project: Path, cli_executor: FakeExecutor):
        runner.invoke(app, ["bump", "minor", "--path", str(temp_project)])
        pyproject = temp_project / "pyproject.toml"
        pyproject.write_text(pyproject.read_text().replace("1.3.0", "1.2.0"))
        cli_executor.calls.clear()

        result = runner.invoke(app, ["bump", "minor", "--path", str(temp_project)])

        assert result.exit_code == 0, result.output
        assert "Nothing to do" in result.output
        assert cli_executor.commands("git", "commit") == []

    def test_command_failure(self, temp_project: Path, cli_executor: FakeExecutor):
        cli_executor.respond(["git", "commit"], "nothing to commit", success=False)

        result = runner.invoke(app, ["bump", "minor", "--path", str(temp_project)])

        assert result.exit_code == 1
        assert "Command failed" in result.output
        assert "nothing to commit" in result.output

    def test_missing_manifest(self, tmp_path: Path):
        result = runner.invoke(app, ["bump", "minor", "--path", str(tmp_path)])

        assert result.exit_code == 1
        assert "Error loading project" in result.output


def test_version_option():
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output
