"""Rewrite the marked stats region of a README."""

import re
from pathlib import Path

from .models import DEFAULT_END_MARKER, DEFAULT_START_MARKER


def _region_pattern(start: str, end: str) -> re.Pattern:
    return re.compile(re.escape(start) + r".*" + re.escape(end), re.DOTALL)


def has_markers(text: str, start: str = DEFAULT_START_MARKER, end: str = DEFAULT_END_MARKER) -> bool:
    return _region_pattern(start, end).search(text) is not None


def replace_marked_region(
    text: str,
    block: str,
    start: str = DEFAULT_START_MARKER,
    end: str = DEFAULT_END_MARKER,
) -> str:
    """Replace everything from ``start`` through ``end`` with ``block`` wrapped in the markers.

    Text outside the markers is kept verbatim. Without markers the text is
    returned unchanged.
    """
    replacement = f"{start}\n{block}\n{end}"
    # Callable replacement: the block may contain backslashes
    return _region_pattern(start, end).sub(lambda _m: replacement, text, count=1)


def update_readme(
    path: Path,
    block: str,
    start: str = DEFAULT_START_MARKER,
    end: str = DEFAULT_END_MARKER,
) -> bool:
    """Read ``path`` once and write it back once with the region replaced.

    The file is written even when the markers are missing. Returns whether
    they were found.
    """
    with open(path, encoding="utf-8", newline="") as f:
        text = f.read()
    found = has_markers(text, start, end)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(replace_marked_region(text, block, start, end))
    return found
