"""Configuration models for release-bump.

Configuration lives in the ``[tool.release-bump]`` table of
pyproject.toml. Every field has a default, so an empty table (or no
table at all) is a valid configuration.
"""

from __future__ import annotations

from pathlib import Path
from string import Formatter

from pydantic import BaseModel, ConfigDict, Field, field_validator

MESSAGE_PLACEHOLDERS = frozenset({"version"})
COMMAND_PLACEHOLDERS = frozenset({"kind", "version", "message", "preid"})


class _StrictModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


def check_placeholders(template: str, allowed: frozenset[str]) -> set[str]:
    """Return the placeholder names used in a ``str.format`` template.

    Raises:
        ValueError: If the template is malformed or uses a placeholder
            outside ``allowed``
    """
    try:
        fields = [
            (name, spec) for _, name, spec, _ in Formatter().parse(template) if name is not None
        ]
    except ValueError as e:
        raise ValueError(f"malformed placeholder in {template!r}: {e}") from e

    for name, spec in fields:
        if name not in allowed or spec:
            names = ", ".join(f"{{{n}}}" for n in sorted(allowed))
            raise ValueError(
                f"unsupported placeholder {{{name}}} in {template!r} (allowed: {names}; "
                "write literal braces as {{ and }})"
            )
    return {name for name, _ in fields}


class ChangelogConfig(_StrictModel):
    """Changelog file settings."""

    path: Path = Path("CHANGELOG.md")
    title: str = "# CHANGELOG"
    commit_message: str = "Update CHANGELOG"
    merge_prefix: str = "Merge"

    @field_validator("title")
    @classmethod
    def check_title_is_heading(cls, value: str) -> str:
        if not value.startswith("# "):
            raise ValueError("title must be a level-one Markdown heading, e.g. '# CHANGELOG'")
        return value


class VersionConfig(_StrictModel):
    """Version bump and tagging settings.

    ``command`` replaces the built-in bump with an external command. Its
    arguments may use the ``{kind}``, ``{version}``, ``{message}`` and
    ``{preid}`` placeholders, e.g.
    ``["npm", "version", "{kind}", "--preid", "{preid}", "-m", "{message}"]``.
    ``{preid}`` is empty when no pre-release identifier is given.
    """

    tag_prefix: str = "v"
    message: str = "v{version}"
    preid: str | None = None
    command: list[str] = Field(default_factory=list)

    @field_validator("message")
    @classmethod
    def check_message_placeholder(cls, value: str) -> str:
        if "version" not in check_placeholders(value, MESSAGE_PLACEHOLDERS):
            raise ValueError("message must contain the {version} placeholder")
        return value

    @field_validator("command")
    @classmethod
    def check_command_placeholders(cls, value: list[str]) -> list[str]:
        for arg in value:
            check_placeholders(arg, COMMAND_PLACEHOLDERS)
        return value


class ReleaseBumpConfig(_StrictModel):
    """Root configuration."""

    changelog: ChangelogConfig = Field(default_factory=ChangelogConfig)
    version: VersionConfig = Field(default_factory=VersionConfig)
    repository_url: str | None = None
    resume: bool = False

    def tag_for(self, version: object) -> str:
        """Tag name for a version, e.g. ``v1.2.0``."""
        return f"{self.version.tag_prefix}{version}"
