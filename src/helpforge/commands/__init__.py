"""Built-in CLI command implementations for helpforge.

Each sub-module registers one command (or command group) on the root Typer
application in :mod:`helpforge.app`:

* :mod:`~helpforge.commands.generate` -- ``helpforge fish``,
  ``helpforge install`` and ``helpforge tree``.
* :mod:`~helpforge.commands.profile` -- ``helpforge profile``.
"""
