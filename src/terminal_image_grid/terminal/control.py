"""Escape sequence helpers and the hidden-cursor scope."""

from __future__ import annotations

import re
import signal
import sys
import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING

from terminal_image_grid.constants import (
    CSI,
    EXIT_SIGNAL_NAMES,
    HIDE_CURSOR,
    SHOW_CURSOR,
)
from terminal_image_grid.logging_utils import logger

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterable, Iterator, Sequence
    from types import FrameType
    from typing import TextIO


def cursor_to(row: int, col: int) -> str:
    """Return the sequence moving the cursor to a 1-based position."""
    return f"{CSI}{row};{col}H"


def compile_patterns(patterns: Iterable[str]) -> tuple[re.Pattern[str], ...]:
    """Compile regex sources, preserving order."""
    return tuple(re.compile(pattern) for pattern in patterns)


def strip_control_sequences(
    line: str,
    patterns: Sequence[re.Pattern[str]],
) -> str:
    """Remove every match of ``patterns`` from ``line``."""
    for pattern in patterns:
        line = pattern.sub("", line)
    return line


def _raise_exit(signum: int, _frame: FrameType | None) -> None:
    raise SystemExit(128 + signum)


@contextmanager
def exit_on_signals(names: Sequence[str] = EXIT_SIGNAL_NAMES) -> Iterator[None]:
    """
    Turn termination signals into ``SystemExit`` inside the block.

    This lets ``finally`` clauses run when the process is killed.
    Previous handlers are reinstated on exit. Outside the main thread
    signal handlers cannot be installed, so the block runs unchanged.
    """
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    previous: dict[signal.Signals, object] = {}
    for name in names:
        signum = getattr(signal, name, None)
        if signum is None:
            continue
        previous[signum] = signal.signal(signum, _raise_exit)
    try:
        yield
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)


@contextmanager
def cursor_hidden(stream: TextIO | None = None) -> Iterator[None]:
    """
    Hide the terminal cursor for the duration of the block.

    The cursor is shown again however the block ends: normal return,
    exception, Ctrl-C, or SIGTERM/SIGHUP.
    """
    out = stream if stream is not None else sys.stdout
    with exit_on_signals():
        out.write(HIDE_CURSOR)
        out.flush()
        try:
            yield
        finally:
            out.write(SHOW_CURSOR)
            out.flush()
            logger.debug("Cursor visibility restored")
