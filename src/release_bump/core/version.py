"""Semantic version parsing and increment rules.

Versions follow SemVer 2.0.0. Increments follow the rules used by
package managers such as npm: bumping a pre-release to its own release
level finalises it instead of skipping a release.

Example:
    >>> v = Version.parse("1.2.0")
    >>> str(v.bump(ReleaseKind.MINOR))
    '1.3.0'
    >>> str(v.bump(ReleaseKind.PREMINOR, "beta"))
    '1.3.0-beta.0'
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from enum import StrEnum
from functools import total_ordering

from release_bump.exceptions import InvalidReleaseKindError, InvalidVersionError

_SEMVER_RE = re.compile(
    r"^v?"
    r"(?P<major>0|[1-9]\d*)\.(?P<minor>0|[1-9]\d*)\.(?P<patch>0|[1-9]\d*)"
    r"(?:-(?P<prerelease>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+(?P<build>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)

PreReleaseId = int | str


class ReleaseKind(StrEnum):
    """Recognized release kinds."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    PREMAJOR = "premajor"
    PREMINOR = "preminor"
    PREPATCH = "prepatch"
    PRERELEASE = "prerelease"

    @classmethod
    def from_string(cls, value: str) -> ReleaseKind | None:
        try:
            return cls(value)
        except ValueError:
            return None


def _parse_identifier(part: str) -> PreReleaseId:
    if part.isdigit():
        if len(part) > 1 and part.startswith("0"):
            raise InvalidVersionError(f"Numeric identifier has a leading zero: {part}")
        return int(part)
    return part


def _compare_identifiers(left: PreReleaseId, right: PreReleaseId) -> int:
    # Numeric identifiers always have lower precedence than alphanumeric ones.
    if isinstance(left, int) and isinstance(right, int):
        return (left > right) - (left < right)
    if isinstance(left, int):
        return -1
    if isinstance(right, int):
        return 1
    return (left > right) - (left < right)


@total_ordering
@dataclass(frozen=True, slots=True)
class Version:
    """An immutable semantic version.

    Attributes:
        major: Major version number
        minor: Minor version number
        patch: Patch version number
        prerelease: Dot-separated pre-release identifiers
        build: Dot-separated build metadata (ignored for ordering)
    """

    major: int
    minor: int
    patch: int
    prerelease: tuple[PreReleaseId, ...] = ()
    build: tuple[str, ...] = ()

    @classmethod
    def parse(cls, value: str) -> Version:
        """Parse a version string, allowing an optional leading ``v``.

        Raises:
            InvalidVersionError: If the string is not a valid version
        """
        match = _SEMVER_RE.match(value.strip())
        if not match:
            raise InvalidVersionError(f"Invalid semantic version: {value!r}")

        prerelease: tuple[PreReleaseId, ...] = ()
        if match.group("prerelease"):
            prerelease = tuple(_parse_identifier(p) for p in match.group("prerelease").split("."))
        build = tuple(match.group("build").split(".")) if match.group("build") else ()

        return cls(
            major=int(match.group("major")),
            minor=int(match.group("minor")),
            patch=int(match.group("patch")),
            prerelease=prerelease,
            build=build,
        )

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += "-" + ".".join(str(p) for p in self.prerelease)
        if self.build:
            text += "+" + ".".join(self.build)
        return text

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._compare(other) == 0

    def __lt__(self, other: Version) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._compare(other) < 0

    def __hash__(self) -> int:
        return hash((self.major, self.minor, self.patch, self.prerelease))

    def _compare(self, other: Version) -> int:
        core = (self.major, self.minor, self.patch)
        other_core = (other.major, other.minor, other.patch)
        if core != other_core:
            return -1 if core < other_core else 1

        # A release has higher precedence than any of its pre-releases.
        if not self.prerelease or not other.prerelease:
            return (not self.prerelease) - (not other.prerelease)

        for left, right in zip(self.prerelease, other.prerelease, strict=False):
            result = _compare_identifiers(left, right)
            if result:
                return result
        return (len(self.prerelease) > len(other.prerelease)) - (
            len(self.prerelease) < len(other.prerelease)
        )

    def bump(self, kind: ReleaseKind, preid: str | None = None) -> Version:
        """Return the next version for a release kind.

        Args:
            kind: Release kind to apply
            preid: Pre-release identifier prefix for the ``pre*`` kinds

        Returns:
            A new Version without build metadata
        """
        base = replace(self, build=())

        if kind is ReleaseKind.MAJOR:
            if base.prerelease and base.minor == 0 and base.patch == 0:
                return replace(base, prerelease=())
            return Version(base.major + 1, 0, 0)

        if kind is ReleaseKind.MINOR:
            if base.prerelease and base.patch == 0:
                return replace(base, prerelease=())
            return Version(base.major, base.minor + 1, 0)

        if kind is ReleaseKind.PATCH:
            if base.prerelease:
                return replace(base, prerelease=())
            return Version(base.major, base.minor, base.patch + 1)

        if kind is ReleaseKind.PREMAJOR:
            return Version(base.major + 1, 0, 0, _initial_prerelease(preid))

        if kind is ReleaseKind.PREMINOR:
            return Version(base.major, base.minor + 1, 0, _initial_prerelease(preid))

        if kind is ReleaseKind.PREPATCH:
            return Version(base.major, base.minor, base.patch + 1, _initial_prerelease(preid))

        # PRERELEASE
        if not base.prerelease:
            return Version(base.major, base.minor, base.patch + 1, _initial_prerelease(preid))
        return replace(base, prerelease=_next_prerelease(base.prerelease, preid))


def _initial_prerelease(preid: str | None) -> tuple[PreReleaseId, ...]:
    return (preid, 0) if preid else (0,)


def _next_prerelease(
    current: tuple[PreReleaseId, ...], preid: str | None
) -> tuple[PreReleaseId, ...]:
    identifiers = list(current)
    for index in range(len(identifiers) - 1, -1, -1):
        value = identifiers[index]
        if isinstance(value, int):
            identifiers[index] = value + 1
            break
    else:
        identifiers.append(0)

    if preid:
        # Keep counting only when the prefix matches, otherwise restart.
        if identifiers[0] == preid and len(identifiers) > 1 and isinstance(identifiers[1], int):
            return tuple(identifiers)
        return (preid, 0)
    return tuple(identifiers)


def parse_version(value: str) -> Version:
    """Parse a version string. Shortcut for ``Version.parse``."""
    return Version.parse(value)


def resolve_next_version(
    current: Version | str,
    release_kind: str,
    preid: str | None = None,
) -> Version:
    """Compute the next version for a release.

    ``release_kind`` is either one of the ReleaseKind values or a literal
    version string greater than ``current``.

    Raises:
        InvalidReleaseKindError: If the kind is neither
    """
    current_version = current if isinstance(current, Version) else Version.parse(current)

    kind = ReleaseKind.from_string(release_kind.strip())
    if kind is not None:
        next_version = current_version.bump(kind, preid)
    else:
        try:
            next_version = replace(Version.parse(release_kind), build=())
        except InvalidVersionError as e:
            raise InvalidReleaseKindError(release_kind) from e

    # e.g. "prerelease --preid alpha" on 1.0.0-beta.1 would go backwards
    if next_version <= current_version:
        raise InvalidReleaseKindError(release_kind)
    return next_version
