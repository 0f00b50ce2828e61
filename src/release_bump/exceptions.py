"""Exception hierarchy for release-bump.

All errors raised by the library derive from ReleaseBumpError so the
CLI can report them uniformly and exit with a non-zero status.
"""

from __future__ import annotations

from collections.abc import Sequence


class ReleaseBumpError(Exception):
    """Base class for all release-bump errors."""


class ConfigError(ReleaseBumpError):
    """Configuration could not be loaded."""


class ConfigNotFoundError(ConfigError):
    """A required configuration file does not exist."""


class ConfigValidationError(ConfigError):
    """Configuration values are invalid."""


class ProjectError(ReleaseBumpError):
    """Package metadata could not be read or updated."""


class VersionNotFoundError(ProjectError):
    """No version could be located in the package manifest."""


class InvalidVersionError(ReleaseBumpError):
    """A string is not a valid semantic version."""


class InvalidReleaseKindError(ReleaseBumpError):
    """The requested release kind is not recognized."""

    def __init__(self, release_kind: str) -> None:
        super().__init__(f"Invalid release type: {release_kind}")
        self.release_kind = release_kind


class ChangelogError(ReleaseBumpError):
    """The changelog could not be read or written."""


class CommandError(ReleaseBumpError):
    """An external command reported failure."""

    def __init__(self, message: str, *, command: Sequence[str] = (), output: str = "") -> None:
        super().__init__(message)
        self.command = list(command)
        self.output = output

    def __str__(self) -> str:
        base = super().__str__()
        if self.output:
            return f"{base}\n{self.output.rstrip()}"
        return base


class GitError(CommandError):
    """A git command failed."""
