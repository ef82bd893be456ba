"""Collect candidate image paths from a directory or a piped list."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from terminal_image_grid.config_defaults import DEFAULT_IMAGE_EXTENSIONS
from terminal_image_grid.logging_utils import logger

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterable


def has_image_extension(
    path: Path,
    extensions: Iterable[str] = DEFAULT_IMAGE_EXTENSIONS,
) -> bool:
    """Case-insensitive extension check."""
    return path.suffix.lower() in set(extensions)


def scan_directory(
    directory: Path | str,
    extensions: Iterable[str] = DEFAULT_IMAGE_EXTENSIONS,
) -> list[Path]:
    """
    Return image files directly inside ``directory``.

    Subdirectories are not descended into. Results are sorted by their
    full path.
    """
    exts = set(extensions)
    root = Path(directory)
    found = [
        entry for entry in root.iterdir()
        if entry.is_file() and has_image_extension(entry, exts)
    ]
    return sorted(found, key=str)


def read_path_list(
    lines: Iterable[str],
    extensions: Iterable[str] = DEFAULT_IMAGE_EXTENSIONS,
) -> list[Path]:
    """
    Filter piped lines down to existing image files, keeping input order.

    Each line is stripped of surrounding whitespace; blank lines, files
    with other extensions, and paths that are missing or not regular
    files are dropped.
    """
    exts = set(extensions)
    accepted = []
    for raw in lines:
        candidate = raw.strip()
        if not candidate:
            continue
        path = Path(candidate)
        if not has_image_extension(path, exts):
            logger.debug("Ignoring non-image entry: %s", candidate)
            continue
        if not path.is_file():
            logger.debug("Ignoring missing file: %s", candidate)
            continue
        accepted.append(path)
    return accepted
