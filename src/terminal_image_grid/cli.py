"""CLI argument parsing and main entry point."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TYPE_CHECKING, NoReturn, TypeVar

from pydantic import ValidationError

import terminal_image_grid.config as tig_config
import terminal_image_grid.main as tig_main
import terminal_image_grid.runtime as tig_runtime
from terminal_image_grid.config_defaults import (
    DEFAULT_IMAGES_PER_ROW,
    DEFAULT_MIN_CELL_WIDTH,
    DEFAULT_RENDERER_COMMAND,
    DEFAULT_SCAN_DIR,
)
from terminal_image_grid.constants import EXIT_FAILURE, EXIT_OK
from terminal_image_grid.errors import ImageGridError, UsageError
from terminal_image_grid.logging_utils import logger, set_verbosity

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable, Sequence
    from typing import TextIO

T = TypeVar("T")

EXIT_INTERRUPTED = 130


class UsageErrorParser(argparse.ArgumentParser):
    """ArgumentParser that exits with status 1 on usage errors."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(EXIT_FAILURE, f"{self.prog}: error: {message}\n")


def positive_int(text: str) -> int:
    """Argparse-style validator that enforces a strictly positive integer."""
    try:
        value = int(text)
    except ValueError as exc:
        msg = "must be an integer"
        raise ValueError(msg) from exc
    if value <= 0:
        msg = "must be positive"
        raise ValueError(msg)
    return value


def _wrap_validator(
    validator: Callable[[str], T],
    error_cls: type[argparse.ArgumentTypeError] = argparse.ArgumentTypeError,
) -> Callable[[str], T]:
    """Convert ``ValueError`` from a validator into ``ArgumentTypeError``."""

    def wrapper(text: str) -> T:
        try:
            return validator(text)
        except ValueError as exc:
            raise error_cls(str(exc)) from exc

    return wrapper


def build_arg_parser() -> argparse.ArgumentParser:
    """Construct the argument parser for the command-line interface."""
    p = UsageErrorParser(
        prog="imgrid",
        description="Show the images in a directory as a thumbnail grid.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  imgrid ~/Pictures\n"
            "  imgrid -n 3 screenshots/\n"
            "  find . -name '*.png' | imgrid\n\n"
            "When a list of paths is piped on stdin, PATH is ignored."
        ),
    )
    p.add_argument(
        "path", nargs="?", default=DEFAULT_SCAN_DIR,
        help="Directory to scan (default: current directory)")

    grid = p.add_argument_group("grid")
    grid.add_argument(
        "-n", "--imgs-per-row", dest="imgs_per_row",
        type=_wrap_validator(positive_int), default=None,
        help=f"Thumbnails per row (default: {DEFAULT_IMAGES_PER_ROW})")
    grid.add_argument(
        "--min-cell-width", type=_wrap_validator(positive_int), default=None,
        help=(
            "Narrowest allowed cell in columns; fewer thumbnails per row "
            f"are used on narrow terminals (default: {DEFAULT_MIN_CELL_WIDTH})"
        ))

    render = p.add_argument_group("renderer")
    render.add_argument(
        "--renderer", type=str, default=None,
        help=(
            "Command that draws one image in the terminal "
            f"(default: {DEFAULT_RENDERER_COMMAND})"
        ))

    cfg = p.add_argument_group("config")
    cfg.add_argument(
        "--config", type=str,
        help="Path to a TOML config file")
    cfg.add_argument(
        "--validate-config-only", action="store_true",
        help="Validate the config file and exit")

    misc = p.add_argument_group("misc")
    misc.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging on stderr")
    misc.add_argument(
        "--version", action="version",
        version=f"%(prog)s {tig_runtime.resolve_project_version()}")

    return p


def log_parameters(
    cfg: tig_config.ImageGridConfig,
    args: argparse.Namespace,
) -> None:
    """Log the effective settings at debug level."""
    if getattr(args, "config", None):
        logger.debug("Loaded config from: %s", args.config)
    logger.debug("Images per row: %d", cfg.grid.requested_columns)
    logger.debug("Minimum cell width: %d", cfg.grid.min_cell_width)
    logger.debug("Renderer: %s", cfg.renderer.command)
    logger.debug("Extensions: %s", ", ".join(cfg.discovery.extensions))


def stdin_is_piped(stdin: TextIO | None) -> bool:
    """True when ``stdin`` exists and is not an interactive terminal."""
    if stdin is None:
        return False
    try:
        return not stdin.isatty()
    except (AttributeError, ValueError):
        return False


def tolerate_undecodable_paths(stdin: TextIO) -> TextIO:
    """
    Decode piped file names the way the OS does.

    Bytes that are not valid in the stream's encoding become surrogate
    escapes, so a single odd file name cannot abort the whole list.
    """
    reconfigure = getattr(stdin, "reconfigure", None)
    if reconfigure is not None:
        reconfigure(errors="surrogateescape")
    return stdin


def load_config(
    args: argparse.Namespace,
) -> tig_config.ImageGridConfig | None:
    """Build the effective config; None when it is invalid."""
    base_cfg: tig_config.ImageGridConfig | None = None
    try:
        if args.config:
            base_cfg = tig_config.ConfigLoader.load(args.config)
        return tig_config.build_config_from_cli(vars(args), base_config=base_cfg)
    except FileNotFoundError as exc:
        logger.error("%s", exc)
    except ValidationError as exc:
        logger.error("Invalid configuration:\n%s", exc)
    return None


def run_from_args(
    parser: argparse.ArgumentParser,
    args: argparse.Namespace,
    stdin: TextIO | None,
    stdout: TextIO | None = None,
) -> int:
    """Run the grid display for parsed arguments and return the exit code."""
    set_verbosity(verbose=args.verbose)
    cfg = load_config(args)
    if cfg is None:
        return EXIT_FAILURE
    if args.validate_config_only:
        logger.info("Config %s validated successfully.", args.config)
        return EXIT_OK

    log_parameters(cfg, args)

    piped = stdin_is_piped(stdin)
    directory: Path | None = None
    if piped:
        if args.path != DEFAULT_SCAN_DIR:
            logger.warning("Reading paths from stdin; ignoring %s", args.path)
        stdin = tolerate_undecodable_paths(stdin)
    else:
        try:
            directory = tig_runtime.validate_directory(args.path)
        except UsageError as exc:
            parser.error(str(exc))

    try:
        tig_runtime.ensure_renderer_available(cfg.renderer)
    except ImageGridError as exc:
        logger.error("%s", exc)
        return EXIT_FAILURE

    images = tig_main.collect_images(
        cfg,
        directory=directory,
        piped_lines=stdin if piped else None,
    )
    if not images:
        source = "stdin" if piped else str(directory)
        logger.info("No images found in %s", source)
        return EXIT_OK

    try:
        tig_main.display_grid(images, cfg, stream=stdout)
    except ImageGridError as exc:
        logger.error("%s", exc)
        return EXIT_FAILURE
    return EXIT_OK


def main(
    argv: Sequence[str] | None = None,
    stdin: TextIO | None = None,
) -> int:
    """Run the command-line interface and return the process exit code."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    try:
        return run_from_args(
            parser,
            args,
            stdin if stdin is not None else sys.stdin,
        )
    except KeyboardInterrupt:
        return EXIT_INTERRUPTED


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
