"""Input validation helpers for runtime configuration."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import TYPE_CHECKING

from terminal_image_grid.errors import RendererNotFoundError, UsageError
from terminal_image_grid.rendering.renderer import renderer_argv

if TYPE_CHECKING:  # pragma: no cover
    from terminal_image_grid.config import RendererConfig


def validate_directory(path: str | Path) -> Path:
    """Ensure ``path`` names an existing directory."""
    directory = Path(path)
    if not directory.is_dir():
        msg = f"Not a directory: {path}"
        raise UsageError(msg)
    return directory


def ensure_renderer_available(config: RendererConfig) -> str:
    """Return the resolved renderer executable or raise if it is missing."""
    try:
        argv = renderer_argv(config)
    except ValueError as exc:
        msg = f"Cannot parse renderer command {config.command!r}: {exc}"
        raise UsageError(msg) from exc
    if not argv:
        msg = "Renderer command is empty"
        raise RendererNotFoundError(msg)
    resolved = shutil.which(argv[0])
    if resolved is None:
        msg = (
            f"Required renderer '{argv[0]}' was not found on PATH. "
            "Install it or pass --renderer."
        )
        raise RendererNotFoundError(msg)
    return resolved
