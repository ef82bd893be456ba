"""Renderer boundary: external command adapter and frame helpers."""

from .frames import first_frame
from .renderer import (
    CommandRenderer,
    ImageRenderer,
    probe_animation,
    renderer_argv,
)

__all__ = [
    "CommandRenderer",
    "ImageRenderer",
    "first_frame",
    "probe_animation",
    "renderer_argv",
]
