# tests/test_cli.py
"""
Tests for the CLI parser and execution flow.

Modules tested:
- build_arg_parser()
- run_from_args()
- main()

Simulates CLI usage with monkeypatching and verifies exit codes for
usage errors, a missing renderer, empty results, and piped input.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest
import tomlkit

import terminal_image_grid.cli as tig_cli
import terminal_image_grid.main as tig_main
import terminal_image_grid.runtime as tig_runtime
from terminal_image_grid.config_defaults import DEFAULT_IMAGES_PER_ROW
from terminal_image_grid.errors import RendererError, RendererNotFoundError

if TYPE_CHECKING:
    from conftest import TtyStdin


@pytest.fixture
def renderer_installed(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pretend the renderer executable is on PATH."""
    monkeypatch.setattr(
        tig_runtime,
        "ensure_renderer_available",
        lambda _cfg: "/usr/bin/catimg",
    )


@pytest.fixture
def display_calls(monkeypatch: pytest.MonkeyPatch) -> list[dict[str, Any]]:
    """Capture display_grid calls instead of drawing."""
    calls: list[dict[str, Any]] = []

    def fake_display(images, cfg, **kwargs) -> list:
        calls.append({"images": list(images), "cfg": cfg, **kwargs})
        return []

    monkeypatch.setattr(tig_main, "display_grid", fake_display)
    return calls


class TestCLIArgumentParsing:
    """Unit tests for flag parsing and validation."""

    def test_defaults(self) -> None:
        args = tig_cli.build_arg_parser().parse_args([])
        assert args.path == "."
        assert args.imgs_per_row is None
        assert args.verbose is False

    def test_flags(self) -> None:
        args = tig_cli.build_arg_parser().parse_args(
            ["-n", "3", "--min-cell-width", "12", "--renderer", "viu", "pics"])
        assert args.imgs_per_row == 3  # noqa: PLR2004
        assert args.min_cell_width == 12  # noqa: PLR2004
        assert args.renderer == "viu"
        assert args.path == "pics"

    @pytest.mark.parametrize("value", ["0", "-3", "two"])
    def test_invalid_images_per_row_exits_with_usage(
        self,
        value: str,
        capsys: pytest.CaptureFixture[str],
        tty_stdin: TtyStdin,
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            tig_cli.main(["-n", value], stdin=tty_stdin)
        assert exc_info.value.code == 1
        err = capsys.readouterr().err
        assert "usage:" in err
        assert "imgs-per-row" in err

    def test_positive_int(self) -> None:
        assert tig_cli.positive_int("4") == 4  # noqa: PLR2004
        with pytest.raises(ValueError, match="must be an integer"):
            tig_cli.positive_int("x")
        with pytest.raises(ValueError, match="must be positive"):
            tig_cli.positive_int("0")

    def test_version_flag(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            tig_cli.main(["--version"])
        assert exc_info.value.code == 0
        assert capsys.readouterr().out.startswith("imgrid ")


class TestCLIRun:
    """End-to-end behavior of main() with drawing stubbed out."""

    def test_not_a_directory_is_usage_error(
        self,
        tmp_path: Path,
        tty_stdin: TtyStdin,
        capsys: pytest.CaptureFixture[str],
        display_calls: list[dict[str, Any]],
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            tig_cli.main([str(tmp_path / "missing")], stdin=tty_stdin)
        assert exc_info.value.code == 1
        assert "Not a directory" in capsys.readouterr().err
        assert display_calls == []

    def test_missing_renderer_exits_before_drawing(
        self,
        tmp_path: Path,
        tty_stdin: TtyStdin,
        make_image: Callable[..., Path],
        display_calls: list[dict[str, Any]],
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        make_image("a.png")
        code = tig_cli.main(
            ["--renderer", "definitely-not-installed-renderer", str(tmp_path)],
            stdin=tty_stdin,
        )
        assert code == 1
        assert display_calls == []
        assert "definitely-not-installed-renderer" in caplog.text

    @pytest.mark.usefixtures("renderer_installed")
    def test_empty_directory_reports_no_images(
        self,
        tmp_path: Path,
        tty_stdin: TtyStdin,
        display_calls: list[dict[str, Any]],
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        with caplog.at_level(logging.INFO, logger="terminal_image_grid"):
            code = tig_cli.main([str(tmp_path)], stdin=tty_stdin)
        assert code == 0
        assert display_calls == []
        assert "No images found" in caplog.text

    @pytest.mark.usefixtures("renderer_installed")
    def test_empty_stdin_reports_no_images(
        self,
        display_calls: list[dict[str, Any]],
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        with caplog.at_level(logging.INFO, logger="terminal_image_grid"):
            code = tig_cli.main([], stdin=io.StringIO(""))
        assert code == 0
        assert display_calls == []
        assert "No images found in stdin" in caplog.text

    @pytest.mark.usefixtures("renderer_installed")
    def test_directory_images_displayed(
        self,
        tmp_path: Path,
        tty_stdin: TtyStdin,
        make_image: Callable[..., Path],
        display_calls: list[dict[str, Any]],
    ) -> None:
        expected = [make_image("a.png"), make_image("b.jpg")]
        code = tig_cli.main(["-n", "2", str(tmp_path)], stdin=tty_stdin)

        assert code == 0
        assert display_calls[0]["images"] == expected
        assert display_calls[0]["cfg"].grid.requested_columns == 2  # noqa: PLR2004

    @pytest.mark.usefixtures("renderer_installed")
    def test_piped_paths_override_directory(
        self,
        tmp_path: Path,
        make_image: Callable[..., Path],
        display_calls: list[dict[str, Any]],
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        second = make_image("second.png")
        first = make_image("first.gif")
        stdin = io.StringIO(f"{second}\nnot-an-image.txt\n{first}\n")

        code = tig_cli.main(["somewhere-else"], stdin=stdin)

        assert code == 0
        assert display_calls[0]["images"] == [second, first]
        assert display_calls[0]["cfg"].grid.requested_columns == (
            DEFAULT_IMAGES_PER_ROW)
        assert "ignoring somewhere-else" in caplog.text

    @pytest.mark.usefixtures("renderer_installed")
    def test_piped_undecodable_name_is_skipped(
        self,
        tmp_path: Path,
        make_image: Callable[..., Path],
        display_calls: list[dict[str, Any]],
    ) -> None:
        good = make_image("good.png")
        raw = (bytes(tmp_path) + b"/caf\xe9.png\n"
               + bytes(good) + b"\n")
        stdin = io.TextIOWrapper(io.BytesIO(raw), encoding="utf-8",
                                 errors="strict")

        code = tig_cli.main([], stdin=stdin)

        assert code == 0
        assert display_calls[0]["images"] == [good]

    def test_unparseable_renderer_command_exits_nonzero(
        self,
        tmp_path: Path,
        tty_stdin: TtyStdin,
        display_calls: list[dict[str, Any]],
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        code = tig_cli.main(
            ["--renderer", "'catimg", str(tmp_path)], stdin=tty_stdin)
        assert code == 1
        assert display_calls == []
        assert "Cannot parse renderer command" in caplog.text

    @pytest.mark.usefixtures("renderer_installed")
    def test_renderer_failure_exits_nonzero(
        self,
        tmp_path: Path,
        tty_stdin: TtyStdin,
        make_image: Callable[..., Path],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        make_image("a.png")

        def failing_display(*_args: Any, **_kwargs: Any) -> list:
            msg = "catimg exited with status 1"
            raise RendererError(msg)

        monkeypatch.setattr(tig_main, "display_grid", failing_display)
        assert tig_cli.main([str(tmp_path)], stdin=tty_stdin) == 1

    def test_interrupt_returns_130(
        self,
        tmp_path: Path,
        tty_stdin: TtyStdin,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        def interrupted(*_args: Any, **_kwargs: Any) -> int:
            raise KeyboardInterrupt

        monkeypatch.setattr(tig_cli, "run_from_args", interrupted)
        assert tig_cli.main([str(tmp_path)], stdin=tty_stdin) == 130  # noqa: PLR2004


class TestCLIConfig:
    """Config file handling from the command line."""

    def _write(self, path: Path, data: dict[str, Any]) -> Path:
        path.write_text(tomlkit.dumps(data), encoding="utf-8")
        return path

    def test_validate_config_only(
        self,
        tmp_path: Path,
        tty_stdin: TtyStdin,
        display_calls: list[dict[str, Any]],
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        cfg_path = self._write(tmp_path / "grid.toml",
                               {"grid": {"requested_columns": 4}})
        with caplog.at_level(logging.INFO, logger="terminal_image_grid"):
            code = tig_cli.main(
                ["--config", str(cfg_path), "--validate-config-only"],
                stdin=tty_stdin,
            )
        assert code == 0
        assert "validated successfully" in caplog.text
        assert display_calls == []

    def test_invalid_config_exits_nonzero(
        self,
        tmp_path: Path,
        tty_stdin: TtyStdin,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        cfg_path = self._write(tmp_path / "bad.toml",
                               {"grid": {"requested_columns": 0}})
        code = tig_cli.main(["--config", str(cfg_path)], stdin=tty_stdin)
        assert code == 1
        assert "Invalid configuration" in caplog.text

    def test_missing_config_exits_nonzero(
        self,
        tmp_path: Path,
        tty_stdin: TtyStdin,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        code = tig_cli.main(
            ["--config", str(tmp_path / "nope.toml")], stdin=tty_stdin)
        assert code == 1
        assert "Config file not found" in caplog.text

    @pytest.mark.usefixtures("renderer_installed")
    def test_flag_overrides_config_file(
        self,
        tmp_path: Path,
        tty_stdin: TtyStdin,
        make_image: Callable[..., Path],
        display_calls: list[dict[str, Any]],
    ) -> None:
        images_dir = tmp_path / "imgs"
        make_image("a.png", directory=images_dir)
        cfg_path = self._write(tmp_path / "grid.toml", {
            "grid": {"requested_columns": 4, "min_cell_width": 8},
        })
        tig_cli.main(
            ["--config", str(cfg_path), "-n", "6", str(images_dir)],
            stdin=tty_stdin,
        )
        cfg = display_calls[0]["cfg"]
        assert cfg.grid.requested_columns == 6  # noqa: PLR2004
        assert cfg.grid.min_cell_width == 8  # noqa: PLR2004


def test_stdin_is_piped() -> None:
    assert tig_cli.stdin_is_piped(io.StringIO("x")) is True
    assert tig_cli.stdin_is_piped(None) is False


def test_missing_renderer_error_type() -> None:
    """The real availability check raises for unknown executables."""
    from terminal_image_grid.config import RendererConfig

    with pytest.raises(RendererNotFoundError):
        tig_runtime.ensure_renderer_available(
            RendererConfig(command="definitely-not-installed-renderer"))
