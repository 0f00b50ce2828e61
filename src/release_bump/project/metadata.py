"""Package metadata: name, current version and repository URL.

Metadata is read once per invocation from the project manifest and
passed to the release pipeline as a plain value. Both pyproject.toml
and package.json manifests are supported.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Any

from release_bump.config.loader import load_pyproject_toml
from release_bump.exceptions import ProjectError, VersionNotFoundError
from release_bump.project.pyproject import (
    get_pyproject_version,
    get_repository_url,
    update_pyproject_version,
)


class ManifestKind(StrEnum):
    PYPROJECT = "pyproject.toml"
    PACKAGE_JSON = "package.json"


@dataclass(frozen=True, slots=True)
class PackageMetadata:
    """Metadata read from a package manifest.

    Attributes:
        name: Package name
        version: Current version string
        repository_url: Base URL of the hosted repository, if declared
        manifest: Path to the manifest file
        kind: Manifest format
    """

    name: str
    version: str
    repository_url: str | None
    manifest: Path
    kind: ManifestKind


def load_package_metadata(project_path: Path) -> PackageMetadata:
    """Read package metadata from ``project_path``.

    pyproject.toml is preferred; package.json is used when there is no
    pyproject.toml.

    Raises:
        ProjectError: If no manifest exists or it lacks a name
        VersionNotFoundError: If the manifest has no version
    """
    pyproject_path = project_path / ManifestKind.PYPROJECT
    if pyproject_path.is_file():
        return _load_pyproject(pyproject_path)

    package_json_path = project_path / ManifestKind.PACKAGE_JSON
    if package_json_path.is_file():
        return _load_package_json(package_json_path)

    raise ProjectError(f"No pyproject.toml or package.json found in {project_path}")


def _load_pyproject(path: Path) -> PackageMetadata:
    data = load_pyproject_toml(path)
    name = data.get("project", {}).get("name") or data.get("tool", {}).get("poetry", {}).get(
        "name"
    )
    if not name:
        raise ProjectError(f"No project name found in {path}")

    return PackageMetadata(
        name=name,
        version=get_pyproject_version(path),
        repository_url=get_repository_url(data),
        manifest=path,
        kind=ManifestKind.PYPROJECT,
    )


def _read_package_json(path: Path) -> dict[str, Any]:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ProjectError(f"Invalid JSON in {path}: {e}") from e


def _load_package_json(path: Path) -> PackageMetadata:
    data = _read_package_json(path)
    if not data.get("name"):
        raise ProjectError(f"No package name found in {path}")
    if not data.get("version"):
        raise VersionNotFoundError(f"No version found in {path}")

    repository = data.get("repository")
    if isinstance(repository, dict):
        repository = repository.get("url")

    return PackageMetadata(
        name=data["name"],
        version=data["version"],
        repository_url=repository or None,
        manifest=path,
        kind=ManifestKind.PACKAGE_JSON,
    )


def update_manifest_version(metadata: PackageMetadata, new_version: str) -> Path:
    """Write ``new_version`` into the manifest ``metadata`` was read from.

    Returns:
        Path to the updated manifest
    """
    if metadata.kind is ManifestKind.PYPROJECT:
        return update_pyproject_version(metadata.manifest, new_version)

    return _update_package_json_version(metadata.manifest, new_version)


def _update_package_json_version(path: Path, new_version: str) -> Path:
    content = path.read_text(encoding="utf-8")
    data = _read_package_json(path)
    expected = {**data, "version": new_version}

    # Nested objects may carry their own "version" key; only accept the
    # rewrite that changes the top-level value and nothing else.
    pattern = re.compile(r'("version"\s*:\s*)"' + re.escape(str(data.get("version", ""))) + '"')
    for match in pattern.finditer(content):
        head, tail = content[: match.start()], content[match.end() :]
        candidate = f'{head}{match.group(1)}"{new_version}"{tail}'
        if json.loads(candidate) == expected:
            path.write_text(candidate, encoding="utf-8")
            return path

    raise VersionNotFoundError(f"Could not find top-level version to update in {path}")
