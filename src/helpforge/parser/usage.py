"""Infer argument kinds from a command's usage lines.

Usage lines name their positional arguments with uppercase placeholders::

    Usage:  docker network connect [OPTIONS] NETWORK CONTAINER

After the command's own chain (``docker network connect``) is removed, every
maximal run of ``[A-Z_]`` is looked up in the tool's placeholder table and
every maximal run of ``[a-z_]`` in its keyword table.
"""

from __future__ import annotations

import logging
import re
from typing import Sequence

from helpforge.models import ArgumentKind, ParserConfig

logger = logging.getLogger(__name__)

_UPPERCASE_TOKEN = re.compile(r"[A-Z_]+")
_LOWERCASE_TOKEN = re.compile(r"[a-z_]+")


def classify_arguments(
    usage_lines: Sequence[str],
    chain: Sequence[str],
    config: ParserConfig,
) -> frozenset[ArgumentKind]:
    """Collect the argument kinds referenced by *usage_lines*.

    Every usage line must begin, once trimmed, with the space-joined
    *chain*. As soon as one line does not, the whole result is the empty set:
    a usage line for some other command says nothing reliable about this one.

    Args:
        usage_lines: Lines of the usage section.
        chain: Tokens naming the command, tool name first.
        config: Placeholder and keyword tables of the tool.

    Returns:
        The union of every recognised kind; unrecognised tokens are ignored.
    """
    prefix = " ".join(chain)
    kinds: set[ArgumentKind] = set()

    for line in usage_lines:
        line = line.strip()
        if not line.startswith(prefix):
            logger.debug("Usage line %r does not start with %r, no arguments inferred", line, prefix)
            return frozenset()
        remainder = line[len(prefix):]

        for token in _UPPERCASE_TOKEN.findall(remainder):
            kind = config.placeholders.get(token)
            if kind is not None:
                kinds.add(kind)
        for token in _LOWERCASE_TOKEN.findall(remainder):
            kind = config.keywords.get(token)
            if kind is not None:
                kinds.add(kind)

    return frozenset(kinds)
