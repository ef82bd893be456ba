"""
Test configuration and shared fixtures for terminal_image_grid.

This module defines reusable pytest fixtures for creating image files,
fake renderers and placement sinks, and for building configs. These
fixtures support all test modules in the test suite.

Note:
    This file is automatically loaded by pytest and should not be
    renamed.

"""
from __future__ import annotations

import io
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from PIL import Image

from terminal_image_grid.config import ImageGridConfig
from terminal_image_grid.logging_utils import logger
from terminal_image_grid.type_defs import Placement, RenderedImage


class RecordingSink:
    """Placement sink that keeps everything it receives."""

    def __init__(self) -> None:
        self.placements: list[Placement] = []

    def __call__(self, placement: Placement) -> None:
        self.placements.append(placement)

    def captions(self) -> list[Placement]:
        return [p for p in self.placements if p.kind == "caption"]

    def lines_for_col(self, col: int) -> list[Placement]:
        return [p for p in self.placements
                if p.kind == "line" and p.col == col]


class FakeRenderer:
    """Renderer returning a fixed number of lines per image name."""

    def __init__(
        self,
        heights: dict[str, int] | None = None,
        *,
        default_height: int = 3,
        outputs: dict[str, RenderedImage] | None = None,
    ) -> None:
        self.heights = heights or {}
        self.default_height = default_height
        self.outputs = outputs or {}
        self.calls: list[tuple[str, int]] = []

    def __call__(self, image_id: Any, width: int) -> RenderedImage:
        name = Path(image_id).name
        self.calls.append((name, width))
        if name in self.outputs:
            return self.outputs[name]
        height = self.heights.get(name, self.default_height)
        return RenderedImage(
            lines=tuple(f"{name}:{i}" for i in range(height)),
        )


class TtyStdin(io.StringIO):
    """Stand-in for an interactive stdin."""

    def isatty(self) -> bool:
        return True


@pytest.fixture
def sink() -> RecordingSink:
    """Provide an empty recording sink."""
    return RecordingSink()


@pytest.fixture
def make_renderer() -> Callable[..., FakeRenderer]:
    """Factory for fake renderers keyed by image basename."""
    return FakeRenderer


@pytest.fixture
def tty_stdin() -> TtyStdin:
    """An empty stdin that reports itself as a terminal."""
    return TtyStdin()


@pytest.fixture
def make_image(tmp_path: Path) -> Callable[..., Path]:
    """
    Create small image files with Pillow.

    ``animated=True`` writes a two-frame GIF.
    """

    def _make(
        name: str,
        *,
        directory: Path | None = None,
        color: str = "red",
        animated: bool = False,
    ) -> Path:
        target_dir = directory if directory is not None else tmp_path
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / name
        if animated:
            frames = [Image.new("RGB", (8, 8), c) for c in (color, "blue")]
            frames[0].save(path, save_all=True, append_images=frames[1:],
                           duration=100, loop=0)
        else:
            Image.new("RGB", (8, 8), color).save(path)
        return path

    return _make


@pytest.fixture
def make_config() -> Callable[..., ImageGridConfig]:
    """Build ImageGridConfig instances with optional section overrides."""

    def _build(**sections: dict[str, Any]) -> ImageGridConfig:
        return ImageGridConfig.model_validate(
            {name: dict(values) for name, values in sections.items()},
        )

    return _build


@pytest.fixture(autouse=True)
def enable_logger_propagation(monkeypatch: pytest.MonkeyPatch) -> None:
    """Enable propagation for the package logger to allow caplog to work."""
    monkeypatch.setattr(logger, "propagate", True)
