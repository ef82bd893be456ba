"""Reconcile the requested column count with the terminal width."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from terminal_image_grid.config import GridConfig
    from terminal_image_grid.type_defs import TerminalGeometry


@dataclass(frozen=True, slots=True)
class GridDimensions:
    """Effective columns and per-cell width for one run."""

    columns: int
    cell_width: int
    reduced: bool = False


def effective_columns(
    requested_columns: int,
    cols: int,
    min_cell_width: int,
) -> int:
    """Number of cells per row that fit ``cols`` at ``min_cell_width``."""
    return max(1, min(requested_columns, cols // min_cell_width))


def compute_grid_dimensions(
    config: GridConfig,
    geometry: TerminalGeometry,
) -> GridDimensions:
    """
    Compute effective columns and cell width.

    When the request had to be reduced, the cell width never drops
    below ``min_cell_width``, even on terminals narrower than one cell.
    """
    columns = effective_columns(
        config.requested_columns,
        geometry.cols,
        config.min_cell_width,
    )
    cell_width = geometry.cols // columns
    reduced = columns < config.requested_columns
    if reduced:
        cell_width = max(cell_width, config.min_cell_width)
    return GridDimensions(columns=columns, cell_width=cell_width,
                          reduced=reduced)
