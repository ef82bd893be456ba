"""
Configuration schema and loader for the terminal image grid.

Defines Pydantic models representing structured configuration sections,
a TOML-based config loader, and the merge of command-line overrides on
top of file or default values.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import tomlkit
from pydantic import BaseModel, Field, field_validator

from terminal_image_grid.config_defaults import (
    DEFAULT_ANIMATED_EXTENSIONS,
    DEFAULT_CURSOR_QUERY_TIMEOUT,
    DEFAULT_FRAME_MARKER,
    DEFAULT_IMAGE_EXTENSIONS,
    DEFAULT_IMAGES_PER_ROW,
    DEFAULT_MIN_CELL_WIDTH,
    DEFAULT_RENDERER_ANIMATED_ARGS,
    DEFAULT_RENDERER_COMMAND,
    DEFAULT_RENDERER_WIDTH_FLAG,
    DEFAULT_STRIP_PATTERNS,
    DEFAULT_TERMINAL_COLS,
    DEFAULT_TERMINAL_ROWS,
)
from terminal_image_grid.constants import CONTROLLING_TTY


def _normalize_extensions(values: list[str]) -> list[str]:
    """Lower-case extensions and make sure each starts with a dot."""
    normalized = []
    for value in values:
        ext = value.strip().lower()
        if not ext:
            continue
        normalized.append(ext if ext.startswith(".") else f".{ext}")
    return normalized


class GridConfig(BaseModel):
    """Control how many thumbnails share a row."""

    requested_columns: int = Field(DEFAULT_IMAGES_PER_ROW, ge=1)
    min_cell_width: int = Field(DEFAULT_MIN_CELL_WIDTH, ge=1)


class RendererConfig(BaseModel):
    """Describe the external image-to-terminal renderer."""

    command: str = Field(DEFAULT_RENDERER_COMMAND, min_length=1)
    width_flag: str = DEFAULT_RENDERER_WIDTH_FLAG
    animated_args: list[str] = Field(
        default_factory=lambda: list(DEFAULT_RENDERER_ANIMATED_ARGS),
    )
    animated_extensions: list[str] = Field(
        default_factory=lambda: list(DEFAULT_ANIMATED_EXTENSIONS),
    )
    frame_marker: str = DEFAULT_FRAME_MARKER
    strip_patterns: list[str] = Field(
        default_factory=lambda: list(DEFAULT_STRIP_PATTERNS),
    )

    @field_validator("animated_extensions")
    @classmethod
    def _normalize(cls, value: list[str]) -> list[str]:
        return _normalize_extensions(value)


class TerminalConfig(BaseModel):
    """Fallback geometry and cursor query behavior."""

    fallback_rows: int = Field(DEFAULT_TERMINAL_ROWS, ge=1)
    fallback_cols: int = Field(DEFAULT_TERMINAL_COLS, ge=1)
    cursor_query_timeout: float = Field(DEFAULT_CURSOR_QUERY_TIMEOUT, gt=0)
    tty_path: str = CONTROLLING_TTY


class DiscoveryConfig(BaseModel):
    """Select which files count as images."""

    extensions: list[str] = Field(
        default_factory=lambda: list(DEFAULT_IMAGE_EXTENSIONS),
        min_length=1,
    )

    @field_validator("extensions")
    @classmethod
    def _normalize(cls, value: list[str]) -> list[str]:
        normalized = _normalize_extensions(value)
        if not normalized:
            msg = "at least one image extension is required"
            raise ValueError(msg)
        return normalized


class ImageGridConfig(BaseModel):
    """
    Root configuration object combining all supported sections.

    Mirrors the structure of the TOML config file, grouping related
    parameters under logical categories.
    """

    grid: GridConfig = Field(
        default_factory=lambda: GridConfig.model_validate({}),
    )
    renderer: RendererConfig = Field(
        default_factory=lambda: RendererConfig.model_validate({}),
    )
    terminal: TerminalConfig = Field(
        default_factory=lambda: TerminalConfig.model_validate({}),
    )
    discovery: DiscoveryConfig = Field(
        default_factory=lambda: DiscoveryConfig.model_validate({}),
    )


class ConfigLoader:
    """
    Loads and parses a TOML configuration file into a typed config object.

    Falls back to defaults for any missing subsections or fields.
    """

    @staticmethod
    def load(path: str) -> ImageGridConfig:
        """
        Load an image grid configuration from a TOML file.

        Returns a validated ImageGridConfig instance based on the file
        contents.
        """
        config_path = Path(path)
        if not config_path.is_file():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)

        with config_path.open("r", encoding="utf-8") as f:
            doc = tomlkit.load(f)

        return ImageGridConfig.model_validate(doc.unwrap())


# CLI destination name -> (config section, field)
_CLI_OVERRIDES: dict[str, tuple[str, str]] = {
    "imgs_per_row": ("grid", "requested_columns"),
    "min_cell_width": ("grid", "min_cell_width"),
    "renderer": ("renderer", "command"),
}


def build_config_from_cli(
    args: Mapping[str, Any],
    base_config: ImageGridConfig | None = None,
) -> ImageGridConfig:
    """
    Merge command-line values over a base config.

    Only options the user actually supplied (present and not None in
    ``args``) override the base. The result is re-validated so bad CLI
    values raise ``pydantic.ValidationError`` just like bad file values.
    """
    base = base_config or ImageGridConfig.model_validate({})
    data = base.model_dump()
    for dest, (section, field) in _CLI_OVERRIDES.items():
        value = args.get(dest)
        if value is not None:
            data[section][field] = value
    return ImageGridConfig.model_validate(data)
