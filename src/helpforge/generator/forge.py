"""Build a command tree by recursively reading a tool's ``--help`` output.

This is the core algorithm of helpforge. For every node it:

1. Runs ``<chain> <name> <help flag>`` through an
   :class:`~helpforge.parser.invoker.Invoker`.
2. Infers the node's argument kinds from the usage section.
3. Reads the options sections into :class:`~helpforge.models.Option`
   objects.
4. Reads the subcommand sections and forges each listed subcommand the same
   way, depth-first, in help-text order.

Recursion stops at nodes without a subcommand section. Nothing bounds the
depth other than the tool's own hierarchy.

A node is created only after all of its children exist. Any
:class:`~helpforge.exceptions.InvocationError` or
:class:`~helpforge.exceptions.ContinuationError` therefore leaves no partially
built parent behind; it propagates unchanged to the caller of
:meth:`CommandForge.forge`.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional, Sequence

from helpforge.exceptions import ContinuationError
from helpforge.models import Command, Option, ParserConfig, ToolProfile
from helpforge.parser.columns import split_columns
from helpforge.parser.invoker import Invoker, ProcessInvoker
from helpforge.parser.sections import scan_sections
from helpforge.parser.usage import classify_arguments

logger = logging.getLogger(__name__)


def parse_option_names(field: str) -> tuple[str, str]:
    """Extract ``(long, short)`` flag names from an option's name field.

    Tokens are separated by whitespace and may carry a trailing comma. A
    token starting with ``--`` is the long name, one starting with a single
    ``-`` the short name; anything else (value placeholders such as
    ``string``) is ignored.

    Example::

        >>> parse_option_names("-f, --filter filter")
        ('filter', 'f')
    """
    long = short = ""
    for token in field.split():
        token = token.removesuffix(",")
        if token.startswith("--"):
            long = token[2:]
        elif token.startswith("-"):
            short = token[1:]
    return long, short


class CommandForge:
    """Recursive builder of :class:`~helpforge.models.Command` trees.

    Args:
        config: Help-text vocabulary of the target tool.
        invoker: Runs the tool. Defaults to a :class:`ProcessInvoker`.
        on_node: Optional callback receiving each chain just before its help
            text is requested, e.g. for progress output.
    """

    def __init__(
        self,
        config: ParserConfig,
        invoker: Optional[Invoker] = None,
        on_node: Optional[Callable[[tuple[str, ...]], None]] = None,
    ) -> None:
        self._config = config
        self._invoker = invoker or ProcessInvoker()
        self._on_node = on_node

    def forge(
        self,
        name: str,
        parent_chain: Sequence[str] = (),
        description: str = "",
    ) -> Command:
        """Build the node *name* below *parent_chain*, subtree included.

        Args:
            name: Tool name for the root, subcommand name otherwise.
            parent_chain: Chain of the parent node; empty for the root.
            description: Description the parent listed for this node.

        Returns:
            The fully built node.

        Raises:
            InvocationError: If running the tool fails for this node or any
                node below it.
            ContinuationError: If an options or subcommands section starts
                with a continuation line, here or below.
        """
        chain = (*parent_chain, name)
        if self._on_node is not None:
            self._on_node(chain)

        help_text = self._invoker.run([*chain, self._config.help_flag])
        usage = scan_sections(help_text, [self._config.usage_marker])

        arguments = classify_arguments(
            usage.get(self._config.usage_marker, []), chain, self._config
        )
        options = self._build_options(help_text, chain)
        subcommands = self._build_subcommands(help_text, chain)

        logger.debug(
            "Forged %s: %d option(s), %d subcommand(s), arguments=%s",
            " ".join(chain),
            len(options),
            len(subcommands),
            sorted(kind.value for kind in arguments),
        )
        return Command(
            chain=chain,
            description=description,
            arguments=arguments,
            options=options,
            subcommands=subcommands,
            raw_help=help_text,
        )

    def _build_options(self, help_text: str, chain: tuple[str, ...]) -> tuple[Option, ...]:
        entries = _collect_entries(
            help_text, self._config.option_markers, chain, "options"
        )
        options = []
        for field, description in entries:
            long, short = parse_option_names(field)
            options.append(Option(description=description, long=long, short=short))
        return tuple(options)

    def _build_subcommands(
        self, help_text: str, chain: tuple[str, ...]
    ) -> tuple[Command, ...]:
        entries = _collect_entries(
            help_text, self._config.subcommand_markers, chain, "subcommands"
        )
        strip = self._config.subcommand_strip
        return tuple(
            self.forge(name.rstrip(strip), chain, description)
            for name, description in entries
        )


def _collect_entries(
    help_text: str,
    markers: Iterable[str],
    chain: tuple[str, ...],
    section: str,
) -> list[tuple[str, str]]:
    """Read ``(name, description)`` entries from every *markers* section.

    Sections are split into columns independently and concatenated in order
    of appearance. A line with an empty name extends the previous entry's
    description.

    Raises:
        ContinuationError: If a continuation line comes before any entry.
    """
    entries: list[tuple[str, str]] = []
    for lines in scan_sections(help_text, markers).values():
        for name, description in split_columns(lines):
            if name:
                entries.append((name, description))
                continue
            if not entries:
                raise ContinuationError(
                    f"Continuation line {description!r} precedes the first entry "
                    f"in the {section} of '{' '.join(chain)}'",
                    chain=chain,
                    section=section,
                )
            previous_name, previous_description = entries[-1]
            entries[-1] = (previous_name, f"{previous_description} {description}")
    return entries


def forge_tree(
    profile: ToolProfile,
    invoker: Optional[Invoker] = None,
    on_node: Optional[Callable[[tuple[str, ...]], None]] = None,
) -> Command:
    """Build the whole command tree of the tool described by *profile*."""
    return CommandForge(profile.parser, invoker, on_node).forge(profile.name)
