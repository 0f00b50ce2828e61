"""pyproject.toml version manipulation.

This module reads and updates the version number in pyproject.toml
files. It preserves formatting and comments by using regex-based
replacement rather than full TOML parsing and rewriting.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from release_bump.exceptions import ProjectError, VersionNotFoundError

if TYPE_CHECKING:
    from pathlib import Path

# Sections that may carry the version, in lookup order.
_VERSION_SECTIONS = (r"\[project\]", r"\[tool\.poetry\]")
_VERSION_LINE = r'^(version\s*=\s*)["\']([^"\']+)["\']'


def _section_pattern(header: str) -> re.Pattern[str]:
    # The whole section up to the next table header or EOF.
    return re.compile(rf"^{header}[ \t]*$.*?(?=^\[|\Z)", re.MULTILINE | re.DOTALL)


def get_pyproject_version(pyproject_path: Path) -> str:
    """Get the version from pyproject.toml.

    Raises:
        VersionNotFoundError: If version cannot be found
    """
    content = pyproject_path.read_text(encoding="utf-8")

    for header in _VERSION_SECTIONS:
        section = _section_pattern(header).search(content)
        if not section:
            continue
        match = re.search(_VERSION_LINE, section.group(0), re.MULTILINE)
        if match:
            return match.group(2)

    raise VersionNotFoundError(
        f"Could not find version in {pyproject_path}. "
        "Expected [project].version or [tool.poetry].version."
    )


def update_pyproject_version(pyproject_path: Path, new_version: str) -> Path:
    """Update the version in pyproject.toml.

    Only the first ``version = "..."`` line of the [project] (or, failing
    that, [tool.poetry]) section is rewritten.

    Returns:
        Path to the updated pyproject.toml

    Raises:
        VersionNotFoundError: If version cannot be found
        ProjectError: If the version is already ``new_version``
    """
    content = pyproject_path.read_text(encoding="utf-8")

    def replace_version(match: re.Match[str]) -> str:
        return re.sub(
            _VERSION_LINE,
            rf'\g<1>"{new_version}"',
            match.group(0),
            count=1,
            flags=re.MULTILINE,
        )

    for header in _VERSION_SECTIONS:
        pattern = _section_pattern(header)
        section = pattern.search(content)
        if not section or not re.search(_VERSION_LINE, section.group(0), re.MULTILINE):
            continue

        new_content = pattern.sub(replace_version, content, count=1)
        if new_content == content:
            raise ProjectError(
                f"Version in {pyproject_path} was not updated. It may already be {new_version}."
            )
        pyproject_path.write_text(new_content, encoding="utf-8")
        return pyproject_path

    raise VersionNotFoundError(
        f"Could not find version to update in {pyproject_path}. "
        "Expected [project].version or [tool.poetry].version."
    )


def get_repository_url(pyproject: dict) -> str | None:
    """Find the repository URL in parsed pyproject data.

    Looks at ``[project.urls]`` (Repository, Source, Homepage, in that
    order, matched case-insensitively) and then at ``[tool.poetry]``.
    """
    urls = pyproject.get("project", {}).get("urls", {})
    by_key = {key.lower(): value for key, value in urls.items()}
    for key in ("repository", "source", "source code", "homepage"):
        if by_key.get(key):
            return by_key[key]

    poetry = pyproject.get("tool", {}).get("poetry", {})
    return poetry.get("repository") or poetry.get("homepage")
