"""
Terminal size and cursor position queries.

``measure`` never fails: it tries the attached terminal, then the
controlling terminal device, then falls back to a fixed size.
``query_cursor_row`` asks the terminal where the cursor is using the
device status report and waits a bounded time for the reply.
"""

from __future__ import annotations

import os
import re
import select
import sys
import termios
import time
import tty
from typing import TYPE_CHECKING

from terminal_image_grid.config_defaults import (
    DEFAULT_CURSOR_QUERY_TIMEOUT,
    DEFAULT_CURSOR_ROW,
    DEFAULT_TERMINAL_COLS,
    DEFAULT_TERMINAL_ROWS,
)
from terminal_image_grid.constants import (
    CONTROLLING_TTY,
    CURSOR_POSITION_REPLY_END,
    CURSOR_POSITION_REPLY_PATTERN,
    CURSOR_POSITION_REQUEST,
)
from terminal_image_grid.logging_utils import logger
from terminal_image_grid.type_defs import TerminalGeometry

if TYPE_CHECKING:  # pragma: no cover
    from typing import TextIO

FALLBACK_GEOMETRY = TerminalGeometry(
    rows=DEFAULT_TERMINAL_ROWS,
    cols=DEFAULT_TERMINAL_COLS,
)

_REPLY_RE = re.compile(CURSOR_POSITION_REPLY_PATTERN)
_MAX_REPLY_LENGTH = 32


def _geometry_from_fd(fd: int) -> TerminalGeometry | None:
    """Return the size of the terminal behind ``fd`` or None."""
    try:
        size = os.get_terminal_size(fd)
    except OSError:
        return None
    if size.lines < 1 or size.columns < 1:
        return None
    return TerminalGeometry(rows=size.lines, cols=size.columns)


def measure(
    stream: TextIO | None = None,
    *,
    tty_path: str = CONTROLLING_TTY,
    fallback: TerminalGeometry = FALLBACK_GEOMETRY,
) -> TerminalGeometry:
    """
    Determine usable terminal rows and columns.

    Tries, in order: the output stream when it is a terminal, the
    controlling terminal device when output is redirected, and finally
    ``fallback`` with a warning.
    """
    out = stream if stream is not None else sys.stdout
    try:
        is_tty = out.isatty()
    except (AttributeError, ValueError):
        is_tty = False

    if is_tty:
        geometry = _geometry_from_fd(out.fileno())
        if geometry is not None:
            return geometry

    try:
        fd = os.open(tty_path, os.O_RDONLY | os.O_NOCTTY)
    except OSError:
        fd = None
    if fd is not None:
        try:
            geometry = _geometry_from_fd(fd)
        finally:
            os.close(fd)
        if geometry is not None:
            logger.debug("Measured terminal through %s", tty_path)
            return geometry

    logger.warning(
        "Could not determine terminal size; assuming %dx%d",
        fallback.rows,
        fallback.cols,
    )
    return fallback


def parse_cursor_report(reply: str) -> int:
    """
    Extract the row from a cursor position report like ``ESC[12;40R``.

    Raises ValueError when no report is present in ``reply``.
    """
    match = _REPLY_RE.search(reply)
    if match is None:
        msg = f"Malformed cursor position report: {reply!r}"
        raise ValueError(msg)
    return int(match.group(1))


def _read_reply(fd: int, timeout: float) -> str:
    """Read from ``fd`` until the report terminator or the deadline."""
    deadline = time.monotonic() + timeout
    chunks: list[str] = []
    while True:
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            break
        ready, _, _ = select.select([fd], [], [], remaining)
        if not ready:
            break
        data = os.read(fd, 1)
        if not data:
            break
        char = data.decode("ascii", errors="replace")
        chunks.append(char)
        if char == CURSOR_POSITION_REPLY_END:
            break
        if len(chunks) >= _MAX_REPLY_LENGTH:
            break
    return "".join(chunks)


def query_cursor_row(
    *,
    tty_path: str = CONTROLLING_TTY,
    timeout: float = DEFAULT_CURSOR_QUERY_TIMEOUT,
    default: int = DEFAULT_CURSOR_ROW,
) -> int:
    """
    Ask the terminal for the current cursor row (1-based).

    The controlling terminal is put in cbreak mode for the exchange and
    restored afterwards. Returns ``default`` when the terminal cannot be
    reached, does not answer within ``timeout`` seconds, or answers with
    something unparseable.
    """
    try:
        fd = os.open(tty_path, os.O_RDWR | os.O_NOCTTY)
    except OSError as exc:
        logger.warning("Cannot open %s for cursor query: %s", tty_path, exc)
        return default

    try:
        saved = termios.tcgetattr(fd)
    except termios.error as exc:
        os.close(fd)
        logger.warning("Cursor query unsupported on %s: %s", tty_path, exc)
        return default

    try:
        tty.setcbreak(fd)
        os.write(fd, CURSOR_POSITION_REQUEST.encode("ascii"))
        reply = _read_reply(fd, timeout)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)
        os.close(fd)

    try:
        return parse_cursor_report(reply)
    except ValueError:
        logger.warning(
            "No cursor position reply within %.1fs; assuming row %d",
            timeout,
            default,
        )
        return default
