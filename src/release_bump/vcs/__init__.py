"""Version control and process execution."""

from __future__ import annotations

from release_bump.vcs.executor import CommandExecutor, CommandResult, SubprocessExecutor
from release_bump.vcs.git import Commit, GitRepository

__all__ = [
    "CommandExecutor",
    "CommandResult",
    "Commit",
    "GitRepository",
    "SubprocessExecutor",
]
