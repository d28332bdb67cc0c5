"""Detect the name/description boundary of column-aligned help lines.

Help output lays entries out as two loosely aligned columns::

      -f, --force     Force the removal of a running container
      -l, --link      Remove the specified link

The producing tool's column width is unknown, so the boundary is voted on:
every position where whitespace is followed by an uppercase letter is a
candidate, and the position shared by the most lines wins. Descriptions
conventionally start with a capital letter, which is what makes the vote
converge. Ties resolve to the lowest column so the result never depends on
iteration order.
"""

from __future__ import annotations

import re
from collections import Counter
from typing import Sequence

_DESCRIPTION_HEAD = re.compile(r"\s[A-Z]")


def _candidate_columns(line: str) -> set[int]:
    """Columns in *line* where an uppercase letter follows whitespace."""
    return {match.start() + 1 for match in _DESCRIPTION_HEAD.finditer(line)}


def find_split_column(lines: Sequence[str]) -> int:
    """Return the column at which descriptions start in *lines*.

    Each line votes once for every candidate column it contains. The column
    with the most votes wins; among equally voted columns the lowest one is
    chosen. Without any candidate the column is ``0``, which turns every
    line into a bare description.

    Args:
        lines: One section's line group.

    Returns:
        Zero-based character index of the description column.
    """
    votes: Counter[int] = Counter()
    for line in lines:
        votes.update(_candidate_columns(line))
    if not votes:
        return 0
    return min(votes, key=lambda column: (-votes[column], column))


def split_columns(lines: Sequence[str]) -> list[tuple[str, str]]:
    """Split every line of a group into a trimmed ``(name, description)`` pair.

    An empty name marks a continuation of the previous entry's description.

    Args:
        lines: One section's line group.

    Returns:
        One pair per input line, in input order.
    """
    column = find_split_column(lines)
    return [(line[:column].strip(), line[column:].strip()) for line in lines]
