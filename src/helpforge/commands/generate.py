"""Generate commands -- build a tool's command tree and emit completions.

``fish`` prints the completion script (or writes it to a file),
``install`` drops it into fish's completions directory, and ``tree`` shows
what was discovered without rendering anything.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from helpforge.models import Command, ToolProfile
from helpforge.output import debug, error, get_output, print_data, progress, success, suggest


def _build(tool: str, profile_path: Optional[str]) -> tuple[Command, ToolProfile]:
    """Resolve *tool*'s profile and forge its whole command tree.

    Raises:
        typer.Exit: With the error's exit code when the profile cannot be
            loaded or the tree cannot be built.
    """
    from helpforge.config import resolve_tool_profile
    from helpforge.exceptions import HelpforgeError
    from helpforge.generator import forge_tree

    try:
        profile = resolve_tool_profile(tool, cli_profile=profile_path)
    except HelpforgeError as exc:
        error(f"Config error: {exc}")
        raise typer.Exit(code=exc.exit_code) from None
    debug(f"Using profile for '{profile.name}' (help flag {profile.parser.help_flag})")

    def _on_node(chain: tuple[str, ...]) -> None:
        progress(f"Reading {' '.join(chain)} {profile.parser.help_flag}")

    try:
        root = forge_tree(profile, on_node=_on_node)
    except HelpforgeError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
    debug(f"Discovered {sum(1 for _ in root.walk())} command(s)")
    return root, profile


def _render(root: Command, profile: ToolProfile) -> str:
    from helpforge.render import FishRenderer

    return FishRenderer(profile).render(root)


def fish_command(
    tool: str = typer.Argument(..., help="Executable whose --help output is parsed."),
    profile: Optional[str] = typer.Option(
        None, "--profile", "-p", help="Tool profile file (YAML or JSON)."
    ),
    output_file: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the script to this file instead of stdout."
    ),
) -> None:
    """Print a fish completion script for TOOL.

    Example::

        helpforge fish docker > ~/.config/fish/completions/docker.fish
        helpforge fish kubectl --profile kubectl.yaml -o kubectl.fish
    """
    root, tool_profile = _build(tool, profile)
    script = _render(root, tool_profile)

    if output_file is None:
        print_data(script.rstrip("\n"))
        return

    from helpforge.config import atomic_write

    atomic_write(output_file, script)
    success(f"Completion script written to {output_file}")


def install_command(
    tool: str = typer.Argument(..., help="Executable whose --help output is parsed."),
    profile: Optional[str] = typer.Option(
        None, "--profile", "-p", help="Tool profile file (YAML or JSON)."
    ),
) -> None:
    """Install a fish completion script for TOOL.

    Writes ``~/.config/fish/completions/<tool>.fish`` (honouring
    ``XDG_CONFIG_HOME``).
    """
    from helpforge.config import atomic_write, get_fish_completions_dir

    root, tool_profile = _build(tool, profile)
    script_path = get_fish_completions_dir() / f"{tool_profile.name}.fish"
    atomic_write(script_path, _render(root, tool_profile))

    success(f"Fish completion installed to {script_path}")
    suggest("Restart your shell to activate completions.")


def tree_command(
    tool: str = typer.Argument(..., help="Executable whose --help output is parsed."),
    profile: Optional[str] = typer.Option(
        None, "--profile", "-p", help="Tool profile file (YAML or JSON)."
    ),
) -> None:
    """Show the command tree discovered for TOOL.

    Use ``--json`` for a machine-readable dump.
    """
    root, _ = _build(tool, profile)
    get_output().print_tree(root)
