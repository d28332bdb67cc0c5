"""Partition help text into marker-keyed line groups.

A *marker* is a literal prefix such as ``"Options:"`` that opens a section
of help output. The scanner is a two-state machine:

* **idle** -- lines are discarded;
* **in section(marker)** -- lines are appended to that marker's group.

A blank line always returns to idle. A line starting with a marker enters
that marker's section, and any text after the marker on the same line
(``Usage:  docker rm CONTAINER``) becomes the section's first line. The
text after the marker keeps its leading whitespace so that column alignment
survives for :mod:`~helpforge.parser.columns`.
"""

from __future__ import annotations

from typing import Iterable, Optional


def scan_sections(text: str, markers: Iterable[str]) -> dict[str, list[str]]:
    """Split *text* into ordered line groups keyed by section marker.

    Markers are tried in the order given and must start at column 0. Only
    markers that actually occur are present in the result, in order of first
    appearance. A marker that reappears later appends to its existing group.

    Args:
        text: Raw help output.
        markers: Section header prefixes to look for.

    Returns:
        Mapping of marker to the lines belonging to it.

    Example::

        >>> scan_sections("Usage:  tool run\\n\\nOptions:\\n  -v  Verbose\\n", ["Usage:", "Options:"])
        {'Usage:': ['  tool run'], 'Options:': ['  -v  Verbose']}
    """
    markers = list(markers)
    groups: dict[str, list[str]] = {}
    current: Optional[str] = None

    for line in text.splitlines():
        if not line.strip():
            current = None
            continue

        marker = _match_marker(line, markers)
        if marker is not None:
            current = marker
            group = groups.setdefault(marker, [])
            trailer = line[len(marker):]
            if trailer.strip():
                group.append(trailer)
            continue

        if current is not None:
            groups[current].append(line)

    return groups


def _match_marker(line: str, markers: list[str]) -> Optional[str]:
    """Return the first marker *line* starts with, or ``None``."""
    for marker in markers:
        if line.startswith(marker):
            return marker
    return None
