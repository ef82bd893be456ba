"""
Grid layout split into caption, dimension, and placement helpers.

The package exposes the most commonly used entry points directly.
"""

from __future__ import annotations

from . import captions, engine, grid
from .captions import caption_for, split_extension, truncate
from .engine import GridLayoutEngine, render_width
from .grid import GridDimensions, compute_grid_dimensions, effective_columns

__all__ = [
    "GridDimensions",
    "GridLayoutEngine",
    "caption_for",
    "captions",
    "compute_grid_dimensions",
    "effective_columns",
    "engine",
    "grid",
    "render_width",
    "split_extension",
    "truncate",
]
