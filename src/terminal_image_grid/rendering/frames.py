"""Helpers for consuming animated renderer output."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    import re
    from collections.abc import Iterable, Iterator


def first_frame(lines: Iterable[str], marker: re.Pattern[str]) -> Iterator[str]:
    """
    Yield lines up to, not including, the first frame-repeat marker.

    Text preceding the marker on the same line belongs to the first
    frame and is yielded when it is not empty.
    """
    for line in lines:
        match = marker.search(line)
        if match is None:
            yield line
            continue
        head = line[:match.start()]
        if head:
            yield head
        return
