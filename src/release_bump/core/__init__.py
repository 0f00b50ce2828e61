"""Core business logic for release-bump.

This module contains the fundamental building blocks:
- Semantic version parsing and increments
- Commit log collection and rendering
- Idempotent changelog updates
- Release orchestration
"""

from __future__ import annotations

from release_bump.core.changelog import (
    ChangelogDocument,
    ChangelogSection,
    ChangelogUpdate,
    update_changelog,
)
from release_bump.core.commits import collect_commit_log, is_merge_commit, render_commit_log
from release_bump.core.release import ReleaseOrchestrator, ReleaseOutcome, ReleaseState
from release_bump.core.version import ReleaseKind, Version, parse_version, resolve_next_version

__all__ = [
    # Changelog
    "ChangelogDocument",
    "ChangelogSection",
    "ChangelogUpdate",
    # Release
    "ReleaseKind",
    "ReleaseOrchestrator",
    "ReleaseOutcome",
    "ReleaseState",
    # Version
    "Version",
    # Commits
    "collect_commit_log",
    "is_merge_commit",
    "parse_version",
    "render_commit_log",
    "resolve_next_version",
    "update_changelog",
]
