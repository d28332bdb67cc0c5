"""Render a command tree as a fish completion script.

Every completion line is guarded by a predicate naming the node's chain::

    complete -c docker -n '__fish_docker_command_chain_exactly_matches docker network' -a create -d "Create a network"

Two helper functions are emitted once at the top of the script:

* ``__fish_<tool>_command_chain_satisfies`` -- the tokens already on the
  command line start with the given chain;
* ``__fish_<tool>_command_chain_exactly_matches`` -- additionally, whatever
  token follows the chain looks like a flag (``-x`` or ``--word``), so
  completions are offered right after the chain or between its options.
"""

from __future__ import annotations

import re

from helpforge.models import Command, ToolProfile

_SATISFIES_TEMPLATE = """\
function {satisfies}
    set -l cmd (commandline -poc)
    if test (count $cmd) -lt (count $argv)
        return 1
    end
    for i in (seq (count $argv))
        if test $cmd[$i] != $argv[$i]
            return 1
        end
    end
    return 0
end"""

_EXACTLY_MATCHES_TEMPLATE = """\
function {exactly}
    if not {satisfies} $argv
        return 1
    end
    set -l cmd (commandline -poc)
    if test (count $cmd) -eq (count $argv)
        return 0
    end
    string match -q -r '^--?\\w+' -- $cmd[(math 1 + (count $argv))]
end"""

_NON_WORD = re.compile(r"\W")


def fish_quote(value: str) -> str:
    """Double-quote *value* for fish, escaping ``\\``, ``"`` and ``$``."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("$", "\\$")
    return f'"{escaped}"'


class FishRenderer:
    """Emit ``complete`` directives for a tree built from *profile*'s tool.

    Args:
        profile: Supplies the tool name, help flag and the listing
            expression for each argument kind.
    """

    def __init__(self, profile: ToolProfile) -> None:
        self._profile = profile
        slug = _NON_WORD.sub("_", profile.name)
        self.satisfies = f"__fish_{slug}_command_chain_satisfies"
        self.exactly_matches = f"__fish_{slug}_command_chain_exactly_matches"

    def predicate_functions(self) -> str:
        """The two fish helper function definitions, joined by a newline."""
        return "\n".join([
            _SATISFIES_TEMPLATE.format(satisfies=self.satisfies),
            _EXACTLY_MATCHES_TEMPLATE.format(
                exactly=self.exactly_matches, satisfies=self.satisfies
            ),
        ])

    def render_command(self, command: Command) -> list[str]:
        """Completion lines for one node (children are not descended into).

        Argument kinds come first, in canonical order, then subcommands and
        options in help-text order. Kinds without a configured listing
        expression produce no line.
        """
        prefix = (
            f"complete -c {self._profile.name} "
            f"-n '{self.exactly_matches} {command.chain_string}'"
        )
        lines = []
        for kind in command.ordered_arguments:
            source = self._profile.argument_sources.get(kind)
            if source is None:
                continue
            lines.append(
                f"{prefix} -a {fish_quote(source.expression)} -d {fish_quote(source.label)}"
            )
        for sub in command.subcommands:
            lines.append(f"{prefix} -a {sub.name} -d {fish_quote(sub.description)}")
        for opt in command.options:
            line = prefix
            if opt.short:
                line += f" -s {opt.short}"
            if opt.long:
                line += f" -l {opt.long}"
            lines.append(f"{line} -d {fish_quote(opt.description)}")
        return lines

    def render(self, root: Command) -> str:
        """The complete script for *root* and every node below it."""
        tool = self._profile.name
        lines = [self.predicate_functions(), f"complete -c {tool} -f"]
        lines.append(self._help_flag_line())
        for node in root.walk():
            lines.extend(self.render_command(node))
        return "\n".join(lines) + "\n"

    def _help_flag_line(self) -> str:
        tool = self._profile.name
        flag = self._profile.parser.help_flag
        if flag.startswith("--"):
            switch = f"-l {flag[2:]}"
        else:
            switch = f"-s {flag.lstrip('-')}"
        return f"complete -c {tool} {switch} -d 'Print usage'"
