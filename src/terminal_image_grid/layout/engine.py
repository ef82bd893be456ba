"""
Grid layout and cursor positioning.

The engine walks the image list once, asks the renderer for each
thumbnail, and emits absolute-position placements for the caption and
every rendered line. Rows wrap after the effective column count; the
next row starts one line below the tallest thumbnail of the previous
row. When a thumbnail runs past the bottom of the terminal the
terminal scrolls, so the layout row of the following thumbnail is
pulled back by the overflow.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import TYPE_CHECKING

from terminal_image_grid.config_defaults import (
    DEFAULT_FRAME_MARKER,
    DEFAULT_STRIP_PATTERNS,
)
from terminal_image_grid.constants import RENDER_WIDTH_SCALE
from terminal_image_grid.errors import ImageUnavailableError
from terminal_image_grid.layout.captions import caption_for
from terminal_image_grid.layout.grid import GridDimensions, compute_grid_dimensions
from terminal_image_grid.logging_utils import logger
from terminal_image_grid.rendering.frames import first_frame
from terminal_image_grid.terminal.control import (
    compile_patterns,
    strip_control_sequences,
)
from terminal_image_grid.type_defs import Cell, LayoutCursor, Placement

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable, Iterable, Sequence

    from terminal_image_grid.config import GridConfig
    from terminal_image_grid.type_defs import (
        ImageId,
        PlacementSink,
        RenderedImage,
        Renderer,
        TerminalGeometry,
    )


def render_width(cell_width: int) -> int:
    """Width handed to the renderer, in its half-cell units."""
    return cell_width * RENDER_WIDTH_SCALE - 1


def wrap_row(cursor: LayoutCursor) -> None:
    """Start a new row below the tallest thumbnail of the current one."""
    cursor.current_row += cursor.max_height_in_current_row + 1
    cursor.max_height_in_current_row = 0
    cursor.columns_filled_in_row = 0
    cursor.row_index += 1


def apply_scroll_back(cursor: LayoutCursor) -> None:
    """Consume pending overflow compensation; rows never go below 1."""
    if cursor.pending_scroll_back:
        cursor.current_row -= cursor.pending_scroll_back
        cursor.pending_scroll_back = 0
    cursor.current_row = max(cursor.current_row, 1)


def overflow(current_row: int, line_count: int, terminal_rows: int) -> int:
    """Rows to pull back after a thumbnail ending past the last row."""
    bottom = current_row + line_count
    if bottom > terminal_rows:
        return bottom - terminal_rows + 1
    return 0


class GridLayoutEngine:
    """
    Place thumbnails in a terminal grid.

    ``renderer`` turns an image and a width into lines; ``sink`` receives
    every placement in emission order. ``exists`` decides whether an image
    is still present when its turn comes.
    """

    def __init__(
        self,
        renderer: Renderer,
        sink: PlacementSink,
        *,
        frame_marker: str = DEFAULT_FRAME_MARKER,
        strip_patterns: Sequence[str] = DEFAULT_STRIP_PATTERNS,
        exists: Callable[[Path], bool] = Path.is_file,
    ) -> None:
        self.renderer = renderer
        self.sink = sink
        self.frame_marker = re.compile(frame_marker)
        self.strip_patterns = compile_patterns(strip_patterns)
        self.exists = exists
        self.cursor = LayoutCursor()

    def body_lines(self, rendered: RenderedImage) -> Iterable[str]:
        """Lines of ``rendered`` to emit, first frame only when animated."""
        if not rendered.animated:
            return rendered.lines
        return (
            strip_control_sequences(line, self.strip_patterns)
            for line in first_frame(rendered.lines, self.frame_marker)
        )

    def _render(self, image_id: ImageId, width: int) -> RenderedImage | None:
        if not self.exists(Path(image_id)):
            logger.debug("Skipping vanished image: %s", image_id)
            return None
        try:
            return self.renderer(image_id, width)
        except ImageUnavailableError as exc:
            logger.debug("Skipping image: %s", exc)
            return None

    def place(
        self,
        image_id: ImageId,
        dims: GridDimensions,
        geometry: TerminalGeometry,
    ) -> Cell | None:
        """Place one image and advance the cursor; None when skipped."""
        cursor = self.cursor
        if cursor.columns_filled_in_row >= dims.columns:
            wrap_row(cursor)
        apply_scroll_back(cursor)

        column_index = cursor.columns_filled_in_row
        origin_row = cursor.current_row
        origin_col = column_index * dims.cell_width + 1

        rendered = self._render(image_id, render_width(dims.cell_width))
        if rendered is None:
            cursor.columns_filled_in_row += 1
            return None

        self.sink(Placement(
            row=origin_row,
            col=origin_col,
            text=caption_for(image_id, dims.cell_width),
            kind="caption",
        ))
        line_count = 0
        for i, line in enumerate(self.body_lines(rendered)):
            self.sink(Placement(row=origin_row + i + 1, col=origin_col,
                                text=line))
            line_count += 1

        scroll = overflow(origin_row, line_count, geometry.rows)
        if scroll:
            cursor.pending_scroll_back = scroll
        cursor.max_height_in_current_row = max(
            cursor.max_height_in_current_row, line_count)
        cursor.columns_filled_in_row += 1

        return Cell(
            image_id=image_id,
            row_index=cursor.row_index,
            column_index=column_index,
            origin_row=origin_row,
            origin_col=origin_col,
            rendered_height=line_count,
        )

    def run(
        self,
        images: Sequence[ImageId],
        config: GridConfig,
        geometry: TerminalGeometry,
        *,
        start_row: int = 1,
    ) -> list[Cell]:
        """
        Lay out ``images`` in order and return the cells placed.

        Layout state starts fresh at ``start_row`` on every call.
        """
        self.cursor = LayoutCursor(current_row=max(start_row, 1))
        if not images:
            logger.info("Nothing to display")
            return []

        dims = compute_grid_dimensions(config, geometry)
        logger.debug(
            "Grid: %d columns of width %d on %dx%d terminal",
            dims.columns,
            dims.cell_width,
            geometry.rows,
            geometry.cols,
        )
        cells = []
        for image_id in images:
            cell = self.place(image_id, dims, geometry)
            if cell is not None:
                cells.append(cell)
        return cells
