"""Built-in tool profiles.

A :class:`~helpforge.models.ToolProfile` bundles a tool's help-text
vocabulary with the fish expressions that list its live resources. Docker
ships built in; every other tool starts from :func:`generic_profile` unless
the user supplies a profile file (see :mod:`helpforge.config`).
"""

from __future__ import annotations

from typing import Callable

from helpforge.models import ArgumentKind, ArgumentSource, ParserConfig, ToolProfile


def _docker_listing(resource: str, template: str = "{{.Name}}") -> str:
    return f"(docker {resource} ls --format='{template}')"


def docker_profile() -> ToolProfile:
    """Profile for the Docker CLI."""
    parser = ParserConfig(
        placeholders={
            "CONFIG": ArgumentKind.CONFIG,
            "CONTAINER": ArgumentKind.CONTAINER,
            "IMAGE": ArgumentKind.IMAGE,
            "SOURCE_IMAGE": ArgumentKind.IMAGE,
            "TARGET_IMAGE": ArgumentKind.IMAGE,
            "NETWORK": ArgumentKind.NETWORK,
            "NODE": ArgumentKind.NODE,
            "PLUGIN": ArgumentKind.PLUGIN,
            "SECRET": ArgumentKind.SECRET,
            "SERVICE": ArgumentKind.SERVICE,
            "STACK": ArgumentKind.STACK,
            "VOLUME": ArgumentKind.VOLUME,
            "KEY_FILE": ArgumentKind.FILE,
        },
        keywords={"file": ArgumentKind.FILE},
        # Docker flags CLI plugins with a trailing asterisk ("buildx*").
        subcommand_strip="*",
    )
    sources = {
        ArgumentKind.CONFIG: ArgumentSource(label="Config", expression="(docker config ls)"),
        ArgumentKind.CONTAINER: ArgumentSource(
            label="Container",
            expression="(docker container ls --all --format='{{.Names}}')",
        ),
        ArgumentKind.IMAGE: ArgumentSource(
            label="Image",
            expression=_docker_listing("image", "{{.Repository}}:{{.Tag}}"),
        ),
        ArgumentKind.NETWORK: ArgumentSource(label="Network", expression=_docker_listing("network")),
        ArgumentKind.NODE: ArgumentSource(label="Node", expression=_docker_listing("node")),
        ArgumentKind.PLUGIN: ArgumentSource(label="Plugin", expression=_docker_listing("plugin")),
        ArgumentKind.SECRET: ArgumentSource(label="Secret", expression=_docker_listing("secret")),
        ArgumentKind.SERVICE: ArgumentSource(label="Service", expression=_docker_listing("service")),
        ArgumentKind.STACK: ArgumentSource(label="Stack", expression=_docker_listing("stack")),
        ArgumentKind.VOLUME: ArgumentSource(label="Volume", expression=_docker_listing("volume")),
        ArgumentKind.FILE: ArgumentSource(label="", expression="(ls)"),
    }
    return ToolProfile(name="docker", parser=parser, argument_sources=sources)


def generic_profile(name: str) -> ToolProfile:
    """Profile for an arbitrary tool: default markers, file arguments only."""
    return ToolProfile(
        name=name,
        parser=ParserConfig(),
        argument_sources={ArgumentKind.FILE: ArgumentSource(label="", expression="(ls)")},
    )


BUILTIN_PROFILES: dict[str, Callable[[], ToolProfile]] = {
    "docker": docker_profile,
}
"""Factories for the profiles shipped with helpforge, keyed by tool name."""
