"""Caption truncation that keeps the file extension visible."""

from __future__ import annotations

from pathlib import PurePath

from terminal_image_grid.constants import ELLIPSIS


def split_extension(name: str) -> tuple[str, str]:
    """Split ``name`` at its last dot; the extension keeps the dot."""
    dot = name.rfind(".")
    if dot == -1:
        return name, ""
    return name[:dot], name[dot:]


def truncate(name: str, max_len: int) -> str:
    """
    Shorten ``name`` to ``max_len`` characters with an ellipsis.

    The extension is kept when there is room for at least one character
    of the base name; otherwise it is dropped. For budgets below the
    ellipsis length the result is still the ellipsis, so it can be
    wider than ``max_len``.
    """
    if len(name) <= max_len:
        return name

    base, ext = split_extension(name)
    keep_base = max_len - len(ext) - len(ELLIPSIS)
    if keep_base > 0:
        return base[:keep_base] + ELLIPSIS + ext
    return base[:max(max_len - len(ELLIPSIS), 0)] + ELLIPSIS


def printable_name(name: str) -> str:
    """Replace surrogate-escaped bytes from the filesystem with U+FFFD."""
    return name.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


def caption_for(image_id: str | PurePath, cell_width: int) -> str:
    """Caption for an image in a cell, leaving one column of spacing."""
    return truncate(printable_name(PurePath(image_id).name), cell_width - 1)
