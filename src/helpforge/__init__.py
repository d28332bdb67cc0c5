"""helpforge -- Build shell completions from a command-line tool's ``--help`` output.

This package runs a tool with ``--help``, reconstructs its subcommands,
options and expected argument kinds from the human-readable text, recurses
into every subcommand, and renders the resulting tree as a fish completion
script.

Typical workflow::

    helpforge tree docker                 # inspect what was discovered
    helpforge fish docker > docker.fish   # emit the completion script
    helpforge install docker              # or install it directly

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models for the command tree and tool profiles.
    config: XDG-aware configuration and tool-profile resolution.
    tools: Built-in tool profiles.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"
