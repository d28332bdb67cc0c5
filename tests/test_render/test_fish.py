"""Tests for helpforge.render.fish.

Covers:
- Predicate helper functions named after the tool
- Argument, subcommand and option lines for a node, in that order
- Argument kinds rendered in canonical order; unknown sources skipped
- Double-quote escaping for fish
- Whole-script layout (predicates, header lines, depth-first nodes)
"""

from __future__ import annotations

from helpforge.generator.forge import forge_tree
from helpforge.models import ArgumentKind, Command, Option, ToolProfile
from helpforge.render.fish import FishRenderer, fish_quote
from helpforge.tools import docker_profile

PREDICATE = "__fish_docker_command_chain_exactly_matches"


class TestFishQuote:
    def test_plain(self) -> None:
        assert fish_quote("Create a network") == '"Create a network"'

    def test_escapes(self) -> None:
        assert fish_quote('say "hi" to $USER \\o/') == '"say \\"hi\\" to \\$USER \\\\o/"'

    def test_empty(self) -> None:
        assert fish_quote("") == '""'


class TestPredicates:
    def test_names_follow_tool(self) -> None:
        renderer = FishRenderer(ToolProfile(name="docker-compose"))
        assert renderer.satisfies == "__fish_docker_compose_command_chain_satisfies"
        assert renderer.exactly_matches == "__fish_docker_compose_command_chain_exactly_matches"

    def test_function_bodies(self) -> None:
        text = FishRenderer(docker_profile()).predicate_functions()

        assert text.startswith("function __fish_docker_command_chain_satisfies\n")
        assert "function __fish_docker_command_chain_exactly_matches\n" in text
        assert "    if not __fish_docker_command_chain_satisfies $argv\n" in text
        assert "string match -q -r '^--?\\w+' -- $cmd[(math 1 + (count $argv))]" in text
        assert text.count("\nend") == 2


class TestRenderCommand:
    def test_argument_lines(self) -> None:
        node = Command(
            chain=("docker", "network", "connect"),
            arguments=frozenset({ArgumentKind.CONTAINER, ArgumentKind.NETWORK}),
        )
        lines = FishRenderer(docker_profile()).render_command(node)

        assert lines == [
            f"complete -c docker -n '{PREDICATE} docker network connect' "
            "-a \"(docker container ls --all --format='{{.Names}}')\" -d \"Container\"",
            f"complete -c docker -n '{PREDICATE} docker network connect' "
            "-a \"(docker network ls --format='{{.Name}}')\" -d \"Network\"",
        ]

    def test_kind_without_source_is_skipped(self) -> None:
        profile = ToolProfile(name="tool")
        node = Command(chain=("tool",), arguments=frozenset({ArgumentKind.VOLUME}))
        assert FishRenderer(profile).render_command(node) == []

    def test_subcommand_and_option_lines(self) -> None:
        node = Command(
            chain=("docker", "network"),
            subcommands=(
                Command(chain=("docker", "network", "create"), description="Create a network"),
            ),
            options=(
                Option(description="Only display IDs", long="quiet", short="q"),
                Option(description="Pretty-print", long="format"),
                Option(description="Short only", short="x"),
            ),
        )
        lines = FishRenderer(docker_profile()).render_command(node)
        prefix = f"complete -c docker -n '{PREDICATE} docker network'"

        assert lines == [
            f'{prefix} -a create -d "Create a network"',
            f'{prefix} -s q -l quiet -d "Only display IDs"',
            f'{prefix} -l format -d "Pretty-print"',
            f'{prefix} -s x -d "Short only"',
        ]

    def test_order_is_arguments_subcommands_options(self) -> None:
        node = Command(
            chain=("docker", "x"),
            arguments=frozenset({ArgumentKind.FILE}),
            options=(Option(description="Opt", long="opt"),),
            subcommands=(Command(chain=("docker", "x", "y"), description="Sub"),),
        )
        lines = FishRenderer(docker_profile()).render_command(node)
        assert [line.split(" -d ")[0].split("' ")[1] for line in lines] == [
            '-a "(ls)"',
            "-a y",
            "-l opt",
        ]


class TestRender:
    def test_script_layout(self, docker_invoker) -> None:
        profile = docker_profile()
        root = forge_tree(profile, docker_invoker)
        script = FishRenderer(profile).render(root)
        lines = script.splitlines()

        assert script.endswith("\n")
        assert lines[0] == "function __fish_docker_command_chain_satisfies"
        header = lines.index("complete -c docker -f")
        assert lines[header + 1] == "complete -c docker -l help -d 'Print usage'"

        body = lines[header + 2:]
        assert body[0] == f"complete -c docker -n '{PREDICATE} docker' -a network -d \"Manage networks\""
        assert body[1] == (
            f"complete -c docker -n '{PREDICATE} docker' -a rm -d \"Remove one or more containers\""
        )
        assert f"complete -c docker -n '{PREDICATE} docker network' -a connect -d \"Connect a container to a network\"" in body
        assert (
            f"complete -c docker -n '{PREDICATE} docker network create' -s d -l driver "
            '-d "Driver to manage the Network (default \\"bridge\\")"'
        ) in body
        assert (
            f"complete -c docker -n '{PREDICATE} docker rm' -s v -l volumes "
            '-d "Remove anonymous volumes associated with the container"'
        ) in body

    def test_nodes_rendered_depth_first(self, docker_invoker) -> None:
        profile = docker_profile()
        script = FishRenderer(profile).render(forge_tree(profile, docker_invoker))

        positions = [
            script.index(f"'{PREDICATE} {chain}'")
            for chain in ("docker", "docker network", "docker network connect", "docker network create", "docker rm")
        ]
        assert positions == sorted(positions)

    def test_short_help_flag(self) -> None:
        profile = ToolProfile(name="tool", parser={"help_flag": "-h"})
        script = FishRenderer(profile).render(Command(chain=("tool",)))
        assert "complete -c tool -s h -d 'Print usage'" in script
