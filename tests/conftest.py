"""Shared fixtures for release-bump tests."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from pathlib import Path

import pytest

from release_bump.vcs.executor import CommandResult
from release_bump.vcs.git import Commit

REPO_URL = "https://github.com/owner/repo"
RELEASE_DATE = date(2024, 5, 2)


def git_log_output(commits: Sequence[Commit]) -> str:
    """Build ``git log`` output in the structured format GitRepository requests."""
    return "\n".join(f"{c.sha}\x1f{c.subject}\x1e" for c in commits)


class FakeExecutor:
    """CommandExecutor that records calls and returns canned results.

    Responses are matched by argument prefix; the longest matching prefix
    wins. Unmatched commands succeed with empty output.
    """

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self._responses: dict[tuple[str, ...], CommandResult] = {}

    def respond(self, prefix: Sequence[str], output: str = "", *, success: bool = True) -> None:
        self._responses[tuple(prefix)] = CommandResult(output=output, success=success)

    def run(self, args: Sequence[str]) -> CommandResult:
        args = list(args)
        self.calls.append(args)
        best: tuple[str, ...] | None = None
        for prefix in self._responses:
            if tuple(args[: len(prefix)]) == prefix and (best is None or len(prefix) > len(best)):
                best = prefix
        if best is None:
            return CommandResult(output="", success=True)
        return self._responses[best]

    def commands(self, *prefix: str) -> list[list[str]]:
        """Recorded calls starting with ``prefix``."""
        return [call for call in self.calls if tuple(call[: len(prefix)]) == prefix]


@pytest.fixture
def fake_executor() -> FakeExecutor:
    return FakeExecutor()


@pytest.fixture
def feat_commit() -> Commit:
    return Commit(sha="abc123", subject="Add foo")


@pytest.fixture
def merge_commit() -> Commit:
    return Commit(sha="def456", subject="Merge branch x")


@pytest.fixture
def sample_commits() -> list[Commit]:
    """Commits in git log order (most recent first)."""
    return [
        Commit(sha="c3", subject="Fix crash on empty input"),
        Commit(sha="c2", subject="Merge pull request #12 from owner/feature"),
        Commit(sha="c1", subject="Add foo"),
        Commit(sha="c0", subject="Merge branch 'main' into feature"),
    ]


@pytest.fixture
def temp_project(tmp_path: Path) -> Path:
    """A project directory with pyproject.toml and an existing changelog."""
    (tmp_path / "pyproject.toml").write_text(
        f"""\
[project]
name = "test-project"
version = "1.2.0"
description = "A test project"

[project.urls]
Repository = "{REPO_URL}.git"

[tool.release-bump.version]
tag_prefix = "v"
"""
    )
    (tmp_path / "CHANGELOG.md").write_text(
        "# CHANGELOG\n\n## 1.2.0 (2024-04-11)\n+ Add bar ([view](https://github.com/owner/repo/commit/111))\n"
    )
    return tmp_path
