"""Canonical Pydantic models shared across all helpforge modules.

This is the single source of truth for data shapes in the project. The models
fall into two groups:

**Configuration models** -- serialised as JSON or YAML in the user's config
directory:
    :class:`ArgumentSource`, :class:`ParserConfig`, :class:`ToolProfile`,
    :class:`OutputConfig`, and :class:`GlobalConfig`.

**Command tree models** -- produced by
:class:`~helpforge.generator.forge.CommandForge` and consumed by the
renderers:
    :class:`ArgumentKind`, :class:`Option`, and :class:`Command`.

Tree models are frozen. A :class:`Command` is created only once its options
and every one of its subcommands exist, so a half-built node is never
observable.
"""

from __future__ import annotations

import enum
from typing import Iterator

from pydantic import BaseModel, ConfigDict, Field, field_serializer


# --- Command tree ---


class ArgumentKind(str, enum.Enum):
    """Semantic kinds of positional argument a command can accept.

    Inferred from placeholder tokens in the usage line (``CONTAINER``,
    ``IMAGE``...). Declaration order is the order in which argument
    completions are rendered.
    """

    CONFIG = "config"
    CONTAINER = "container"
    IMAGE = "image"
    NETWORK = "network"
    NODE = "node"
    PLUGIN = "plugin"
    SECRET = "secret"
    SERVICE = "service"
    STACK = "stack"
    VOLUME = "volume"
    FILE = "file"


_KIND_ORDER = list(ArgumentKind)


class Option(BaseModel):
    """A single flag recognised in a command's options section.

    ``long`` and ``short`` are stored without their leading dashes and are
    empty strings when the flag has no such form.
    """

    model_config = ConfigDict(frozen=True)

    description: str = ""
    long: str = ""
    short: str = ""


class Command(BaseModel):
    """One node of the command tree.

    ``chain`` starts with the tool's own name and ends with this node's
    name, so every child's chain is its parent's chain plus one token.
    ``raw_help`` keeps the captured help text for debugging; it is excluded
    from serialisation.

    Example::

        Command(
            chain=("docker", "network", "create"),
            description="Create a network",
            arguments=frozenset(),
            options=(Option(long="driver", short="d", description="Driver"),),
        )
    """

    model_config = ConfigDict(frozen=True)

    chain: tuple[str, ...]
    description: str = ""
    arguments: frozenset[ArgumentKind] = Field(default_factory=frozenset)
    options: tuple[Option, ...] = ()
    subcommands: tuple[Command, ...] = ()
    raw_help: str = Field(default="", exclude=True, repr=False)

    @field_serializer("arguments")
    def _serialize_arguments(self, arguments: frozenset[ArgumentKind]) -> list[ArgumentKind]:
        return sorted(arguments, key=_KIND_ORDER.index)

    @property
    def name(self) -> str:
        """The last token of the chain."""
        return self.chain[-1]

    @property
    def ordered_arguments(self) -> list[ArgumentKind]:
        """The argument kinds in canonical (declaration) order."""
        return sorted(self.arguments, key=_KIND_ORDER.index)

    @property
    def chain_string(self) -> str:
        """The chain joined with single spaces, as it appears in usage lines."""
        return " ".join(self.chain)

    def walk(self) -> Iterator[Command]:
        """Yield this node and every descendant, depth-first, pre-order."""
        yield self
        for sub in self.subcommands:
            yield from sub.walk()


# --- Tool configuration ---


class ArgumentSource(BaseModel):
    """How to complete one :class:`ArgumentKind` for a given tool.

    ``expression`` is a fish command substitution listing live resources
    (e.g. ``(docker network ls --format='{{.Name}}')``); ``label`` becomes
    the completion description.
    """

    label: str = ""
    expression: str


class ParserConfig(BaseModel):
    """Help-text vocabulary of a target tool.

    Markers are literal line prefixes that open a section. ``placeholders``
    maps uppercase usage tokens and ``keywords`` maps lowercase usage tokens
    to argument kinds. Characters in ``subcommand_strip`` are removed from the
    end of subcommand names before they are invoked.
    """

    help_flag: str = Field(default="--help", description="Flag appended to every invocation")
    usage_marker: str = "Usage:"
    option_markers: list[str] = Field(default_factory=lambda: ["Options:"])
    subcommand_markers: list[str] = Field(
        default_factory=lambda: [
            "Commands:",
            "Available Commands:",
            "Management Commands:",
        ]
    )
    placeholders: dict[str, ArgumentKind] = Field(default_factory=dict)
    keywords: dict[str, ArgumentKind] = Field(
        default_factory=lambda: {"file": ArgumentKind.FILE}
    )
    subcommand_strip: str = ""


class ToolProfile(BaseModel):
    """Everything helpforge needs to know about one target tool.

    Profiles are either built in (see :mod:`helpforge.tools`) or loaded from
    a YAML/JSON file by :func:`~helpforge.config.load_tool_profile`.

    See Also:
        :func:`~helpforge.config.resolve_tool_profile`: Precedence rules.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, description="Executable name, also the root chain token")
    parser: ParserConfig = Field(default_factory=ParserConfig)
    argument_sources: dict[ArgumentKind, ArgumentSource] = Field(default_factory=dict)


class OutputConfig(BaseModel):
    """Default output format preferences stored in :class:`GlobalConfig`."""

    format: str = Field(
        default="auto", description="Output format: auto, json, plain, rich"
    )


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/helpforge/config.json``."""

    output: OutputConfig = Field(default_factory=OutputConfig)
