"""Changelog document handling.

The changelog is a Markdown file laid out as::

    # CHANGELOG

    ## 1.3.0 (2024-05-02)
    + Add foo ([view](https://github.com/owner/repo/commit/abc123))

    ## 1.2.0 (2024-04-11)
    ...

New sections are prepended below the title. A section is never added
twice for the same version, which makes the update safe to repeat.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from typing import TYPE_CHECKING

from release_bump.exceptions import ChangelogError

if TYPE_CHECKING:
    from pathlib import Path

    from release_bump.core.version import Version

DEFAULT_TITLE = "# CHANGELOG"

_TITLE_RE = re.compile(r"^# \S")
_SECTION_HEADER_RE = re.compile(r"^## (?P<version>\S+) \((?P<date>[^()]*)\)[ \t]*$")


def today_utc() -> date:
    return datetime.now(UTC).date()


@dataclass(frozen=True, slots=True)
class ChangelogSection:
    """A dated block of entries for one version.

    Attributes:
        version: Version the section describes
        date: Release date (UTC, day precision)
        entries: Rendered commit lines, most recent first
    """

    version: Version
    date: date
    entries: tuple[str, ...] = ()

    @property
    def header(self) -> str:
        return f"## {self.version} ({self.date.isoformat()})"

    def render(self) -> str:
        """Render the header followed by one line per entry."""
        return "".join(f"{line}\n" for line in (self.header, *self.entries))


@dataclass(frozen=True, slots=True)
class SectionHeader:
    """A section header found in an existing changelog."""

    version: str
    date: str
    line_number: int


@dataclass(frozen=True, slots=True)
class ChangelogDocument:
    """A parsed changelog.

    Only the title and section headers are interpreted. The title is a
    leading level-one heading, whatever its wording. ``body`` keeps
    everything after the title verbatim so rewriting never reformats
    earlier releases.
    """

    title: str | None
    body: str
    headers: tuple[SectionHeader, ...] = field(default=())

    @classmethod
    def parse(cls, content: str) -> ChangelogDocument:
        lines = content.splitlines(keepends=True)

        # Title is the first non-blank line, if it is a level-one heading.
        index = 0
        while index < len(lines) and not lines[index].strip():
            index += 1

        found_title = None
        if index < len(lines) and _TITLE_RE.match(lines[index]):
            found_title = lines[index].rstrip()
            index += 1
        else:
            index = 0

        body_lines = lines[index:]
        headers = []
        for offset, line in enumerate(body_lines):
            match = _SECTION_HEADER_RE.match(line.rstrip("\r\n"))
            if match:
                headers.append(
                    SectionHeader(
                        version=match.group("version"),
                        date=match.group("date"),
                        line_number=index + offset + 1,
                    )
                )

        return cls(title=found_title, body="".join(body_lines), headers=tuple(headers))

    @property
    def versions(self) -> list[str]:
        """Versions with a section, in document order."""
        return [h.version for h in self.headers]

    def find_section(self, version: Version | str) -> SectionHeader | None:
        """Return the header for ``version`` if the changelog has one."""
        wanted = str(version)
        for header in self.headers:
            if header.version == wanted:
                return header
        return None


@dataclass(frozen=True, slots=True)
class ChangelogUpdate:
    """Result of ``update_changelog``.

    Attributes:
        content: Updated document (the original when not applied)
        applied: False if a section for the version already existed
    """

    content: str
    applied: bool


def update_changelog(
    content: str,
    section: ChangelogSection,
    *,
    title: str = DEFAULT_TITLE,
) -> ChangelogUpdate:
    """Prepend ``section`` to a changelog unless its version is present.

    Args:
        content: Current changelog text
        section: Section to add
        title: Title line written at the top of the document, replacing
            any existing level-one title

    Returns:
        ChangelogUpdate with the new content and whether it changed
    """
    document = ChangelogDocument.parse(content)
    if document.find_section(section.version) is not None:
        return ChangelogUpdate(content=content, applied=False)

    previous = document.body.strip("\r\n")
    parts = [f"{title}\n\n", section.render()]
    if previous:
        parts.append(f"\n{previous}\n")
    return ChangelogUpdate(content="".join(parts), applied=True)


def read_changelog(path: Path) -> str:
    """Read the changelog file.

    Raises:
        ChangelogError: If the file cannot be read
    """
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise ChangelogError(f"Cannot read changelog {path}: {e}") from e


def write_changelog(path: Path, content: str) -> None:
    """Write the changelog file.

    Raises:
        ChangelogError: If the file cannot be written
    """
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ChangelogError(f"Cannot write changelog {path}: {e}") from e
