"""Terminal geometry, control sequences, and placement output."""

from .control import (
    compile_patterns,
    cursor_hidden,
    cursor_to,
    exit_on_signals,
    strip_control_sequences,
)
from .geometry import (
    FALLBACK_GEOMETRY,
    measure,
    parse_cursor_report,
    query_cursor_row,
)
from .writer import TerminalWriter

__all__ = [
    "FALLBACK_GEOMETRY",
    "TerminalWriter",
    "compile_patterns",
    "cursor_hidden",
    "cursor_to",
    "exit_on_signals",
    "measure",
    "parse_cursor_report",
    "query_cursor_row",
    "strip_control_sequences",
]
