"""Public package exports for the terminal image grid."""

from __future__ import annotations

from .config import GridConfig, ImageGridConfig
from .layout import GridLayoutEngine, compute_grid_dimensions, truncate
from .main import display_grid
from .type_defs import Cell, Placement, RenderedImage, TerminalGeometry

__all__ = [
    "Cell",
    "GridConfig",
    "GridLayoutEngine",
    "ImageGridConfig",
    "Placement",
    "RenderedImage",
    "TerminalGeometry",
    "compute_grid_dimensions",
    "display_grid",
    "truncate",
]
