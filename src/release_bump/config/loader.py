"""Configuration loading from pyproject.toml."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from release_bump.config.models import ReleaseBumpConfig
from release_bump.exceptions import ConfigNotFoundError, ConfigValidationError

TOOL_NAME = "release-bump"


def load_pyproject_toml(path: Path) -> dict[str, Any]:
    """Load and parse a pyproject.toml file.

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigValidationError: If the file is not valid TOML
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"File not found: {path}")
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigValidationError(f"Invalid TOML in {path}: {e}") from e


def extract_release_bump_config(pyproject: dict[str, Any]) -> dict[str, Any]:
    """Return the ``[tool.release-bump]`` table, or an empty dict."""
    return pyproject.get("tool", {}).get(TOOL_NAME, {})


def load_config(path: Path | None = None) -> ReleaseBumpConfig:
    """Load configuration for the project at ``path``.

    A project without pyproject.toml (e.g. one described by package.json)
    gets the default configuration.

    Raises:
        ConfigValidationError: If the configuration is invalid
    """
    project_path = path or Path.cwd()
    pyproject_path = project_path / "pyproject.toml"
    if not pyproject_path.is_file():
        return ReleaseBumpConfig()

    data = extract_release_bump_config(load_pyproject_toml(pyproject_path))
    try:
        return ReleaseBumpConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid [tool.{TOOL_NAME}] configuration:\n{e}") from e
