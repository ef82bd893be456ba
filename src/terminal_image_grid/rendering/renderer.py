"""
External renderer boundary.

A renderer is any callable ``(image, width) -> RenderedImage``. The
default implementation shells out to an image-to-terminal program such
as ``catimg`` and returns its output split into lines. Pillow is used to
tell animated images apart and to reject files that cannot be decoded
before the renderer is launched.
"""

from __future__ import annotations

import shlex
import subprocess
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from PIL import Image, UnidentifiedImageError

from terminal_image_grid.errors import (
    ImageUnavailableError,
    RendererError,
    RendererNotFoundError,
)
from terminal_image_grid.logging_utils import logger
from terminal_image_grid.type_defs import RenderedImage

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable

    from terminal_image_grid.config import RendererConfig
    from terminal_image_grid.type_defs import ImageId


class ImageRenderer(Protocol):
    """Produce the terminal lines for one image at a given width."""

    def __call__(self, image_id: ImageId, width: int) -> RenderedImage:
        ...


def renderer_argv(config: RendererConfig) -> list[str]:
    """Split the configured command into argv form."""
    return shlex.split(config.command)


def probe_animation(path: Path, animated_extensions: list[str]) -> bool:
    """
    Return True when ``path`` holds more than one frame.

    Raises ImageUnavailableError when the file is gone or not an image.
    """
    try:
        with Image.open(path) as im:
            return bool(getattr(im, "is_animated", False))
    except FileNotFoundError as exc:
        msg = f"Image vanished: {path}"
        raise ImageUnavailableError(msg) from exc
    except UnidentifiedImageError as exc:
        msg = f"Cannot decode image: {path}"
        raise ImageUnavailableError(msg) from exc
    except OSError as exc:
        if path.suffix.lower() in animated_extensions:
            logger.debug("Could not probe %s (%s); assuming animated",
                         path, exc)
            return True
        msg = f"Cannot read image: {path}"
        raise ImageUnavailableError(msg) from exc


class CommandRenderer:
    """Render images by running an external command."""

    def __init__(
        self,
        config: RendererConfig,
        runner: Callable[..., subprocess.CompletedProcess[str]] = subprocess.run,
    ) -> None:
        self.config = config
        self._runner = runner
        self._argv = renderer_argv(config)

    def build_command(
        self,
        path: Path,
        width: int,
        *,
        animated: bool,
    ) -> list[str]:
        """Assemble argv for one invocation."""
        cmd = [*self._argv, self.config.width_flag, str(width)]
        if animated:
            cmd.extend(self.config.animated_args)
        cmd.append(str(path))
        return cmd

    def __call__(self, image_id: ImageId, width: int) -> RenderedImage:
        path = Path(image_id)
        animated = probe_animation(path, self.config.animated_extensions)
        cmd = self.build_command(path, width, animated=animated)
        logger.debug("Running renderer: %s", shlex.join(cmd))
        try:
            result = self._runner(
                cmd,
                capture_output=True,
                text=True,
                errors="replace",
                check=False,
            )
        except FileNotFoundError as exc:
            msg = f"Renderer not found: {self._argv[0]}"
            raise RendererNotFoundError(msg) from exc

        if result.returncode != 0:
            if not path.is_file():
                msg = f"Image vanished: {path}"
                raise ImageUnavailableError(msg)
            stderr = (result.stderr or "").strip()
            msg = (
                f"{self._argv[0]} exited with status {result.returncode} "
                f"for {path}: {stderr}"
            )
            raise RendererError(msg)

        return RenderedImage(
            lines=tuple(result.stdout.splitlines()),
            animated=animated,
        )
