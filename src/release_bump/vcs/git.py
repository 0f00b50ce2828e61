"""Git operations used by the release pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from release_bump.exceptions import GitError
from release_bump.vcs.executor import run_checked

if TYPE_CHECKING:
    from release_bump.vcs.executor import CommandExecutor

# Unit and record separators keep subjects intact whatever characters they hold.
_FIELD_SEP = "\x1f"
_RECORD_SEP = "\x1e"
_LOG_FORMAT = f"%H{_FIELD_SEP}%s{_RECORD_SEP}"


@dataclass(frozen=True, slots=True)
class Commit:
    """A commit as read from history.

    Attributes:
        sha: Full commit hash
        subject: First line of the commit message
    """

    sha: str
    subject: str


class GitRepository:
    """Thin wrapper issuing git commands through a CommandExecutor."""

    def __init__(self, executor: CommandExecutor) -> None:
        self.executor = executor

    def _git(self, *args: str) -> str:
        return run_checked(self.executor, ["git", *args], error=GitError)

    def get_commits_since_tag(self, tag: str) -> list[Commit]:
        """Return commits after ``tag`` up to HEAD, most recent first.

        Raises:
            GitError: If the tag does not exist or git fails
        """
        output = self._git("--no-pager", "log", f"{tag}..HEAD", f"--pretty=format:{_LOG_FORMAT}")
        return parse_log(output)

    def commit_paths(self, message: str, *paths: str) -> str:
        """Stage and commit the given paths only."""
        self._git("add", "--", *paths)
        return self._git("commit", "-m", message, "--", *paths)

    def create_tag(self, name: str, message: str) -> str:
        """Create an annotated tag at HEAD."""
        return self._git("tag", "-a", name, "-m", message)


def parse_log(output: str) -> list[Commit]:
    """Parse ``git log`` output produced with the structured pretty format."""
    commits = []
    for record in output.split(_RECORD_SEP):
        record = record.strip("\r\n")
        if not record:
            continue
        sha, _, subject = record.partition(_FIELD_SEP)
        commits.append(Commit(sha=sha.strip(), subject=subject))
    return commits
