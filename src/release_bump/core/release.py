"""Release orchestration.

A release runs these steps in order, stopping at the first failure:

1. Resolve the next version from the release kind.
2. Collect commits since the current version's tag.
3. Add a changelog section for the new version (skipped if present).
4. Write and commit the changelog.
5. Bump the package version, commit it and create an annotated tag.

Nothing is rolled back on failure. Re-running is safe because step 3
never adds a second section for the same version.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from release_bump.core.changelog import (
    ChangelogSection,
    read_changelog,
    today_utc,
    update_changelog,
    write_changelog,
)
from release_bump.core.commits import collect_commit_log
from release_bump.core.version import Version, resolve_next_version
from release_bump.exceptions import ProjectError
from release_bump.project.metadata import update_manifest_version
from release_bump.vcs.executor import run_checked
from release_bump.vcs.git import GitRepository

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import date
    from pathlib import Path

    from release_bump.config.models import ReleaseBumpConfig
    from release_bump.project.metadata import PackageMetadata
    from release_bump.vcs.executor import CommandExecutor

logger = logging.getLogger(__name__)


class ReleaseState(StrEnum):
    START = "start"
    VERSION_RESOLVED = "version-resolved"
    COMMITS_COLLECTED = "commits-collected"
    CHANGELOG_UPDATED = "changelog-updated"
    CHANGELOG_COMMITTED = "changelog-committed"
    VERSION_BUMPED = "version-bumped"
    DONE = "done"
    ABORTED = "aborted"


@dataclass(slots=True)
class ReleaseOutcome:
    """What a release run did.

    Attributes:
        state: Last state reached (DONE on success)
        current_version: Version before the release
        next_version: Version being released
        section: Changelog section built for the release
        changelog_applied: False if the changelog already had the section
        bumped: True if the package version was bumped
        bump_output: Output of the version bump step
        dry_run: True if no changes were made on purpose
    """

    state: ReleaseState
    current_version: Version
    next_version: Version
    section: ChangelogSection | None = None
    changelog_applied: bool = False
    bumped: bool = False
    bump_output: str = ""
    dry_run: bool = False

    @property
    def already_released(self) -> bool:
        return self.section is not None and not self.changelog_applied and not self.dry_run


class ReleaseOrchestrator:
    """Runs the release steps against one project.

    Args:
        executor: Runs git and version commands
        metadata: Package metadata read before the run
        config: release-bump configuration
        project_path: Project root; relative config paths resolve against it
        today: Returns the release date, UTC today by default
    """

    def __init__(
        self,
        *,
        executor: CommandExecutor,
        metadata: PackageMetadata,
        config: ReleaseBumpConfig,
        project_path: Path,
        today: Callable[[], date] = today_utc,
    ) -> None:
        self.executor = executor
        self.metadata = metadata
        self.config = config
        self.project_path = project_path
        self.today = today
        self.repo = GitRepository(executor)
        self.state = ReleaseState.START
        self.aborted_after: ReleaseState | None = None

    @property
    def changelog_path(self) -> Path:
        return self.project_path / self.config.changelog.path

    def run(
        self,
        release_kind: str,
        *,
        preid: str | None = None,
        resume: bool | None = None,
        dry_run: bool = False,
    ) -> ReleaseOutcome:
        """Run the release.

        Args:
            release_kind: Release kind or explicit version, e.g. "minor"
            preid: Pre-release identifier for pre* kinds
            resume: Still bump the version when the changelog already has
                the section (defaults to the ``resume`` config setting)
            dry_run: Stop after building the changelog, changing nothing

        Returns:
            ReleaseOutcome describing what was done

        Raises:
            ReleaseBumpError: On any failure; the state becomes ABORTED
        """
        self.state = ReleaseState.START
        self.aborted_after = None
        try:
            return self._run(
                release_kind,
                preid=preid or self.config.version.preid,
                resume=self.config.resume if resume is None else resume,
                dry_run=dry_run,
            )
        except Exception:
            logger.debug("Release aborted after %s", self.state)
            self.aborted_after = self.state
            self.state = ReleaseState.ABORTED
            raise

    def _run(
        self, release_kind: str, *, preid: str | None, resume: bool, dry_run: bool
    ) -> ReleaseOutcome:
        current = Version.parse(self.metadata.version)
        next_version = resolve_next_version(current, release_kind, preid)
        self.state = ReleaseState.VERSION_RESOLVED
        logger.info("Releasing %s %s -> %s", self.metadata.name, current, next_version)
        outcome = ReleaseOutcome(self.state, current, next_version, dry_run=dry_run)

        entries = collect_commit_log(
            self.repo,
            self.config.tag_for(current),
            self._repository_url(),
            merge_prefix=self.config.changelog.merge_prefix,
        )
        self.state = ReleaseState.COMMITS_COLLECTED

        outcome.section = ChangelogSection(next_version, self.today(), tuple(entries))
        update = update_changelog(
            read_changelog(self.changelog_path),
            outcome.section,
            title=self.config.changelog.title,
        )
        outcome.changelog_applied = update.applied
        self.state = ReleaseState.CHANGELOG_UPDATED

        if dry_run:
            return self._finish(outcome)

        if update.applied:
            write_changelog(self.changelog_path, update.content)
            logger.info("Added changes to the changelog.")
            self.repo.commit_paths(
                self.config.changelog.commit_message,
                self.config.changelog.path.as_posix(),
            )
            logger.info("Committed the changelog.")
            self.state = ReleaseState.CHANGELOG_COMMITTED
        elif not resume:
            logger.warning("Changelog already updated.")
            return self._finish(outcome)
        else:
            logger.warning("Changelog already updated, continuing with the version bump.")

        outcome.bump_output = self._bump_version(release_kind, next_version, preid)
        outcome.bumped = True
        self.state = ReleaseState.VERSION_BUMPED
        logger.info("Updated package version and created tagged commit:\n%s", outcome.bump_output)

        return self._finish(outcome)

    def _finish(self, outcome: ReleaseOutcome) -> ReleaseOutcome:
        self.state = ReleaseState.DONE
        outcome.state = self.state
        return outcome

    def _repository_url(self) -> str:
        url = self.config.repository_url or self.metadata.repository_url
        if not url:
            raise ProjectError(
                f"No repository URL found in {self.metadata.manifest.name}. "
                "Set repository_url in [tool.release-bump]."
            )
        return url

    def _bump_version(self, release_kind: str, next_version: Version, preid: str | None) -> str:
        version_config = self.config.version
        message = version_config.message.format(version=next_version)

        if version_config.command:
            args = [
                arg.format(
                    kind=release_kind, version=next_version, message=message, preid=preid or ""
                )
                for arg in version_config.command
            ]
            return run_checked(self.executor, args)

        manifest = update_manifest_version(self.metadata, str(next_version))
        try:
            manifest_arg = manifest.relative_to(self.project_path).as_posix()
        except ValueError:
            manifest_arg = str(manifest)

        tag = self.config.tag_for(next_version)
        commit_output = self.repo.commit_paths(message, manifest_arg)
        self.repo.create_tag(tag, message)
        return f"{commit_output.strip()}\nTagged {tag}".lstrip()
