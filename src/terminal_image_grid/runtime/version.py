"""Report the package version for ``--version``."""

from __future__ import annotations

from importlib import metadata as importlib_metadata
from pathlib import Path

import tomlkit
from tomlkit.exceptions import TOMLKitError

from terminal_image_grid.logging_utils import logger

DISTRIBUTION_NAME = "terminal-image-grid"
UNKNOWN_VERSION = "0.0.0"


def _pyproject_version(start: Path) -> str | None:
    """Version from the nearest pyproject.toml above ``start``, if any."""
    for parent in start.parents:
        candidate = parent / "pyproject.toml"
        if not candidate.is_file():
            continue
        try:
            doc = tomlkit.parse(candidate.read_text(encoding="utf-8"))
        except (OSError, TOMLKitError) as exc:
            logger.warning("Error reading %s: %s", candidate, exc)
            return None
        version = doc.get("project", {}).get("version")
        if isinstance(version, str) and version.strip():
            return version.strip()
        return None
    return None


def resolve_project_version() -> str:
    """
    Installed distribution version, else the source checkout's version.

    Falls back to ``0.0.0`` when neither is available.
    """
    try:
        return importlib_metadata.version(DISTRIBUTION_NAME)
    except importlib_metadata.PackageNotFoundError:
        pass
    return _pyproject_version(Path(__file__).resolve()) or UNKNOWN_VERSION
