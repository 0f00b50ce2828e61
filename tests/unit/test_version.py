"""Tests for semantic version parsing and increments."""

from __future__ import annotations

import pytest

from release_bump.core.version import (
    ReleaseKind,
    Version,
    parse_version,
    resolve_next_version,
)
from release_bump.exceptions import InvalidReleaseKindError, InvalidVersionError


class TestVersionParse:
    """Tests for Version.parse()."""

    def test_parse_simple(self):
        """Parse a plain version."""
        assert Version.parse("1.2.3") == Version(1, 2, 3)

    def test_parse_with_v_prefix(self):
        """A leading v is accepted."""
        assert parse_version("v1.2.3") == Version(1, 2, 3)

    def test_parse_prerelease_and_build(self):
        """Pre-release identifiers and build metadata are split."""
        v = Version.parse("1.0.0-rc.1+build.5")

        assert v.prerelease == ("rc", 1)
        assert v.build == ("build", "5")
        assert v.is_prerelease

    def test_str_roundtrip(self):
        """str() gives back the canonical form."""
        assert str(Version.parse("2.0.0-beta.3+sha.abc")) == "2.0.0-beta.3+sha.abc"

    @pytest.mark.parametrize("value", ["1.2", "1.2.3.4", "01.2.3", "1.2.3-", "1.2.3-01", "abc"])
    def test_parse_invalid(self, value):
        """Invalid strings raise InvalidVersionError."""
        with pytest.raises(InvalidVersionError):
            Version.parse(value)


class TestVersionOrdering:
    """Tests for SemVer precedence."""

    def test_core_ordering(self):
        assert Version(1, 2, 3) < Version(1, 3, 0) < Version(2, 0, 0)

    def test_prerelease_sorts_before_release(self):
        assert Version.parse("1.0.0-rc.1") < Version.parse("1.0.0")

    def test_prerelease_chain(self):
        """The ordering example from the SemVer specification."""
        chain = [
            "1.0.0-alpha",
            "1.0.0-alpha.1",
            "1.0.0-alpha.beta",
            "1.0.0-beta",
            "1.0.0-beta.2",
            "1.0.0-beta.11",
            "1.0.0-rc.1",
            "1.0.0",
        ]
        versions = [Version.parse(v) for v in chain]
        assert versions == sorted(versions)
        assert all(a < b for a, b in zip(versions, versions[1:], strict=False))

    def test_build_metadata_ignored(self):
        assert Version.parse("1.0.0+a") == Version.parse("1.0.0+b")


class TestVersionBump:
    """Tests for Version.bump()."""

    @pytest.mark.parametrize(
        ("current", "kind", "expected"),
        [
            ("1.2.3", ReleaseKind.MAJOR, "2.0.0"),
            ("1.2.3", ReleaseKind.MINOR, "1.3.0"),
            ("1.2.3", ReleaseKind.PATCH, "1.2.4"),
            ("1.2.0", ReleaseKind.MINOR, "1.3.0"),
            ("1.0.0-rc.1", ReleaseKind.MAJOR, "1.0.0"),
            ("1.2.0-rc.1", ReleaseKind.MINOR, "1.2.0"),
            ("1.2.3-rc.1", ReleaseKind.PATCH, "1.2.3"),
            ("1.2.3-rc.1", ReleaseKind.MINOR, "1.3.0"),
            ("1.2.3", ReleaseKind.PREMAJOR, "2.0.0-0"),
            ("1.2.3", ReleaseKind.PREMINOR, "1.3.0-0"),
            ("1.2.3", ReleaseKind.PREPATCH, "1.2.4-0"),
            ("1.2.3", ReleaseKind.PRERELEASE, "1.2.4-0"),
            ("1.2.4-0", ReleaseKind.PRERELEASE, "1.2.4-1"),
            ("1.2.4-rc", ReleaseKind.PRERELEASE, "1.2.4-rc.0"),
            ("1.2.3+build.1", ReleaseKind.PATCH, "1.2.4"),
        ],
    )
    def test_bump(self, current, kind, expected):
        assert str(Version.parse(current).bump(kind)) == expected

    @pytest.mark.parametrize(
        ("current", "kind", "expected"),
        [
            ("1.2.3", ReleaseKind.PREMINOR, "1.3.0-beta.0"),
            ("1.2.3", ReleaseKind.PRERELEASE, "1.2.4-beta.0"),
            ("1.3.0-beta.0", ReleaseKind.PRERELEASE, "1.3.0-beta.1"),
            ("1.3.0-beta.4", ReleaseKind.PRERELEASE, "1.3.0-beta.5"),
            ("1.3.0-alpha.4", ReleaseKind.PRERELEASE, "1.3.0-beta.0"),
        ],
    )
    def test_bump_with_preid(self, current, kind, expected):
        assert str(Version.parse(current).bump(kind, "beta")) == expected


class TestResolveNextVersion:
    """Tests for resolve_next_version()."""

    def test_minor(self):
        assert resolve_next_version("1.2.0", "minor") == Version(1, 3, 0)

    def test_explicit_version(self):
        """A literal greater version is accepted as the kind."""
        assert resolve_next_version("1.2.0", "2.0.0") == Version(2, 0, 0)

    def test_explicit_version_drops_build(self):
        assert resolve_next_version("1.2.0", "1.3.0+local").build == ()

    @pytest.mark.parametrize("kind", ["banana", "", "MINOR", "1.2.0", "1.1.9", "v1"])
    def test_invalid_kind(self, kind):
        """Unknown kinds and non-increasing versions are rejected."""
        with pytest.raises(InvalidReleaseKindError, match="Invalid release type"):
            resolve_next_version("1.2.0", kind)

    def test_preid_that_would_go_backwards(self):
        """A pre-release that sorts below the current version is rejected."""
        with pytest.raises(InvalidReleaseKindError):
            resolve_next_version("1.0.0-beta.1", "prerelease", "alpha")

    @pytest.mark.parametrize("current", ["0.0.0", "1.2.3", "1.0.0-rc.1", "2.0.0-0", "3.1.4-beta"])
    @pytest.mark.parametrize("kind", list(ReleaseKind))
    def test_result_always_greater(self, current, kind):
        """Every valid release kind yields a strictly greater version."""
        assert resolve_next_version(current, kind.value) > Version.parse(current)
