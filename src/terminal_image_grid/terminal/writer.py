"""Write placement instructions to a terminal stream."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from terminal_image_grid.terminal.control import cursor_to

if TYPE_CHECKING:  # pragma: no cover
    from typing import TextIO

    from terminal_image_grid.type_defs import Placement


class TerminalWriter:
    """
    Placement sink that addresses the cursor absolutely.

    Body lines end with a newline so that a line written on the bottom
    row scrolls the terminal. Captions do not.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream if stream is not None else sys.stdout

    def __call__(self, placement: Placement) -> None:
        self.stream.write(cursor_to(placement.row, placement.col))
        self.stream.write(placement.text)
        if placement.kind == "line":
            self.stream.write("\n")

    def move_to(self, row: int, col: int = 1) -> None:
        self.stream.write(cursor_to(row, col))

    def flush(self) -> None:
        self.stream.flush()
