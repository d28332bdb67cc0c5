"""Profile command -- show or save the tool profile helpforge would use."""

from __future__ import annotations

import json
from typing import Optional

import typer
import yaml

from helpforge.output import OutputFormat, error, get_output, print_data, success, suggest


def profile_command(
    tool: str = typer.Argument(..., help="Executable name."),
    profile: Optional[str] = typer.Option(
        None, "--profile", "-p", help="Tool profile file (YAML or JSON)."
    ),
    save: bool = typer.Option(
        False, "--save", help="Write the resolved profile to the user tools directory."
    ),
) -> None:
    """Print the resolved tool profile for TOOL.

    Without a profile file, built-in or generic defaults are shown. Use
    ``--save`` to copy them into ``~/.config/helpforge/tools/`` as a starting
    point for customisation.
    """
    from helpforge.config import resolve_tool_profile, save_tool_profile
    from helpforge.exceptions import HelpforgeError

    try:
        tool_profile = resolve_tool_profile(tool, cli_profile=profile)
    except HelpforgeError as exc:
        error(f"Config error: {exc}")
        raise typer.Exit(code=exc.exit_code) from None

    if save:
        path = save_tool_profile(tool_profile)
        success(f"Profile saved to {path}")
        suggest(f"Edit it, then run: helpforge fish {tool}")
        return

    data = tool_profile.model_dump(mode="json")
    if get_output().format == OutputFormat.JSON:
        print_data(json.dumps(data, indent=2))
    else:
        print_data(yaml.safe_dump(data, sort_keys=False).rstrip("\n"))
