"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~helpforge.exceptions.HelpforgeError` subclass.
Shell wrappers can inspect the exit code to tell a failing target tool apart
from help text that could not be parsed.

Example::

    $ helpforge fish docker
    $ echo $?
    3   # EXIT_INVOCATION_FAILURE -- docker --help could not be run
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_INVOCATION_FAILURE = 3
"""The target tool could not be started or exited with a non-zero status."""

EXIT_HELP_PARSE_ERROR = 4
"""The target tool's help text could not be turned into a command tree."""
