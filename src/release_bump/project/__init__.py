"""Package manifest access."""

from __future__ import annotations

from release_bump.project.metadata import (
    ManifestKind,
    PackageMetadata,
    load_package_metadata,
    update_manifest_version,
)

__all__ = [
    "ManifestKind",
    "PackageMetadata",
    "load_package_metadata",
    "update_manifest_version",
]
