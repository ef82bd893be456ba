"""
Defines shared data types for the terminal image grid.

Centralizes the value objects passed between the layout engine, the
renderer boundary and the terminal writer.
"""
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

ImageId = Path | str
PlacementKind = Literal["caption", "line"]


@dataclass(frozen=True, slots=True)
class TerminalGeometry:
    """Usable terminal size in character cells."""

    rows: int
    cols: int

    def __post_init__(self) -> None:
        if self.rows < 1 or self.cols < 1:
            msg = (
                "Terminal geometry must be at least 1x1, "
                f"got {self.rows}x{self.cols}"
            )
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class RenderedImage:
    """Terminal lines produced by the renderer for one image."""

    lines: tuple[str, ...]
    animated: bool = False

    @property
    def line_count(self) -> int:
        return len(self.lines)


@dataclass(frozen=True, slots=True)
class Placement:
    """Text to be written at an absolute, 1-based terminal position."""

    row: int
    col: int
    text: str
    kind: PlacementKind = "line"


@dataclass(frozen=True, slots=True)
class Cell:
    """One placed grid slot."""

    image_id: ImageId
    row_index: int
    column_index: int
    origin_row: int
    origin_col: int
    rendered_height: int


@dataclass(slots=True)
class LayoutCursor:
    """Mutable layout state owned by a single engine run."""

    current_row: int = 1
    columns_filled_in_row: int = 0
    max_height_in_current_row: int = 0
    pending_scroll_back: int = 0
    row_index: int = 0

    @property
    def next_free_row(self) -> int:
        """First row below everything placed so far."""
        return self.current_row + self.max_height_in_current_row + 1


Renderer = Callable[[ImageId, int], RenderedImage]
PlacementSink = Callable[[Placement], None]
