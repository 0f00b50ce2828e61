"""Commit log collection and rendering.

Commits since the last release tag are turned into changelog lines of
the form::

    + Add foo ([view](https://github.com/owner/repo/commit/<sha>))

Merge commits are dropped.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from release_bump.vcs.git import Commit, GitRepository

logger = logging.getLogger(__name__)

MERGE_PREFIX = "Merge"


def is_merge_commit(subject: str, prefix: str = MERGE_PREFIX) -> bool:
    """Return True if a commit subject denotes a branch merge.

    The check is case-sensitive and anchored at the start of the subject.
    """
    return subject.startswith(prefix)


def normalize_repository_url(url: str) -> str:
    """Turn a repository URL into a base URL for commit links.

    Strips a ``git+`` scheme prefix, a ``.git`` suffix and trailing slashes.
    """
    url = url.strip()
    url = url.removeprefix("git+")
    url = url.rstrip("/")
    return url.removesuffix(".git")


def format_commit_line(commit: Commit, repository_url: str) -> str:
    """Render a single commit as a changelog entry."""
    return f"+ {commit.subject} ([view]({repository_url}/commit/{commit.sha}))"


def render_commit_log(
    commits: Iterable[Commit],
    repository_url: str,
    *,
    merge_prefix: str = MERGE_PREFIX,
) -> list[str]:
    """Render commits as changelog lines, skipping merge commits.

    Args:
        commits: Commits in history order (most recent first)
        repository_url: Base URL used for commit links
        merge_prefix: Subject prefix identifying merge commits

    Returns:
        Rendered lines in the same order as ``commits``
    """
    base_url = normalize_repository_url(repository_url)
    lines = []
    for commit in commits:
        if is_merge_commit(commit.subject, merge_prefix):
            logger.debug("Skipping merge commit %s", commit.sha[:7])
            continue
        lines.append(format_commit_line(commit, base_url))
    return lines


def collect_commit_log(
    repo: GitRepository,
    since_tag: str,
    repository_url: str,
    *,
    merge_prefix: str = MERGE_PREFIX,
) -> list[str]:
    """Collect rendered changelog lines for commits after ``since_tag``.

    Raises:
        GitError: If the history query fails
    """
    commits = repo.get_commits_since_tag(since_tag)
    logger.debug("Found %d commits since %s", len(commits), since_tag)
    return render_commit_log(commits, repository_url, merge_prefix=merge_prefix)
