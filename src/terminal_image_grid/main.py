"""Top-level orchestration for drawing an image grid in the terminal."""

from __future__ import annotations

from typing import TYPE_CHECKING

import terminal_image_grid.runtime as tig_runtime
from terminal_image_grid.layout.engine import GridLayoutEngine
from terminal_image_grid.logging_utils import logger
from terminal_image_grid.rendering.renderer import CommandRenderer
from terminal_image_grid.terminal.control import cursor_hidden
from terminal_image_grid.terminal.geometry import measure, query_cursor_row
from terminal_image_grid.terminal.writer import TerminalWriter
from terminal_image_grid.type_defs import TerminalGeometry

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterable, Sequence
    from pathlib import Path
    from typing import TextIO

    from terminal_image_grid.config import ImageGridConfig
    from terminal_image_grid.type_defs import Cell, ImageId, Renderer


def collect_images(
    config: ImageGridConfig,
    *,
    directory: Path | None = None,
    piped_lines: Iterable[str] | None = None,
) -> list[Path]:
    """
    Gather the images to show.

    A piped path list takes precedence over ``directory``.
    """
    extensions = config.discovery.extensions
    if piped_lines is not None:
        return tig_runtime.read_path_list(piped_lines, extensions)
    if directory is None:
        msg = "either directory or piped_lines is required"
        raise ValueError(msg)
    return tig_runtime.scan_directory(directory, extensions)


def fallback_geometry(config: ImageGridConfig) -> TerminalGeometry:
    return TerminalGeometry(
        rows=config.terminal.fallback_rows,
        cols=config.terminal.fallback_cols,
    )


def display_grid(
    images: Sequence[ImageId],
    config: ImageGridConfig,
    *,
    stream: TextIO | None = None,
    renderer: Renderer | None = None,
) -> list[Cell]:
    """
    Draw ``images`` as a thumbnail grid and leave the cursor below it.

    The cursor stays hidden while drawing and is shown again on every
    exit path.
    """
    writer = TerminalWriter(stream)
    geometry = measure(
        writer.stream,
        tty_path=config.terminal.tty_path,
        fallback=fallback_geometry(config),
    )
    engine = GridLayoutEngine(
        renderer if renderer is not None else CommandRenderer(config.renderer),
        writer,
        frame_marker=config.renderer.frame_marker,
        strip_patterns=config.renderer.strip_patterns,
    )

    with cursor_hidden(writer.stream):
        start_row = query_cursor_row(
            tty_path=config.terminal.tty_path,
            timeout=config.terminal.cursor_query_timeout,
        )
        cells = engine.run(images, config.grid, geometry, start_row=start_row)
        writer.move_to(min(engine.cursor.next_free_row, geometry.rows))
        writer.flush()

    logger.debug("Placed %d of %d images", len(cells), len(images))
    return cells
