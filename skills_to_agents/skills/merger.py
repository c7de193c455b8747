"""Merging a rendered <skills> block into a target document.

Delimiters are located by exact line matching. A ``<skills>`` line inside an
unrelated fenced code block is still treated as the managed region; keep such
examples indented or escaped in documents this tool maintains.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, Optional, Union

from skills_to_agents.core.errors import MalformedDocumentError
from skills_to_agents.skills.renderer import CLOSE_TAG, OPEN_TAG


def _iter_lines(text: str) -> Iterator[tuple[int, int, str]]:
    """Yield (start, end, line) for each line; ``end`` includes the newline."""
    start = 0
    length = len(text)
    while start < length:
        newline = text.find("\n", start)
        end = length if newline == -1 else newline + 1
        yield start, end, text[start:end].rstrip("\r\n")
        start = end


def find_managed_region(
    text: str,
    path: Optional[Union[str, Path]] = None,
) -> Optional[tuple[int, int]]:
    """Locate the managed region in ``text``.

    Returns:
        ``(start, end)`` character offsets covering the opening line through
        the closing line (with its newline), or None if there is no opening line.

    Raises:
        MalformedDocumentError: If an opening line has no later closing line.
    """
    region_start = None
    for start, end, line in _iter_lines(text):
        if region_start is None:
            if line == OPEN_TAG:
                region_start = start
        elif line == CLOSE_TAG:
            return region_start, end

    if region_start is None:
        return None
    raise MalformedDocumentError(
        f"Found '{OPEN_TAG}' without a matching '{CLOSE_TAG}'" + (f" in {path}" if path else ""),
        path=path,
    )


def merge_skills_block(
    existing: str,
    block: str,
    path: Optional[Union[str, Path]] = None,
) -> str:
    """Return ``existing`` with its managed region replaced by ``block``.

    When the document has no region yet, the block is appended after a single
    blank line (or becomes the whole document when ``existing`` is empty).
    Text around an existing region is kept byte for byte.

    Raises:
        MalformedDocumentError: If the region is opened but never closed.
    """
    region = find_managed_region(existing, path)
    if region is not None:
        start, end = region
        return existing[:start] + block + existing[end:]

    trimmed = existing.rstrip()
    if not trimmed:
        return block
    return f"{trimmed}\n\n{block}"
