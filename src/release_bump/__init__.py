"""release-bump: changelog and version bump automation."""

from __future__ import annotations

__version__ = "0.1.0"
