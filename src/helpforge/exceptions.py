"""Exception hierarchy for helpforge.

All exceptions inherit from :class:`HelpforgeError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`helpforge.exit_codes`.
The top-level error handler in :func:`helpforge.app.main` catches
``HelpforgeError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    HelpforgeError (exit 1)
    +-- InvalidUsageError   (exit 2)
    +-- InvocationError     (exit 3)
    +-- ContinuationError   (exit 4)
    +-- ConfigError         (exit 1)
"""

from __future__ import annotations

from typing import Optional, Sequence

from helpforge.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_HELP_PARSE_ERROR,
    EXIT_INVALID_USAGE,
    EXIT_INVOCATION_FAILURE,
)


class HelpforgeError(Exception):
    """Base exception for all helpforge errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`helpforge.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(HelpforgeError):
    """Raised for invalid CLI arguments."""

    exit_code = EXIT_INVALID_USAGE


class InvocationError(HelpforgeError):
    """Raised when the target tool cannot be started or exits non-zero.

    Fatal for the node being built and, through propagation, for the whole
    tree.

    Args:
        message: Human-readable error description.
        argv: The argument vector that was executed.
        returncode: Process exit status, or ``None`` if it never started.
    """

    exit_code = EXIT_INVOCATION_FAILURE

    def __init__(
        self,
        message: str,
        argv: Sequence[str] = (),
        returncode: Optional[int] = None,
    ):
        super().__init__(message)
        self.argv = tuple(argv)
        self.returncode = returncode


class ContinuationError(HelpforgeError):
    """Raised when a continuation line precedes the first entry of a section.

    Args:
        message: Human-readable error description.
        chain: Chain of the command whose help text is malformed.
        section: Which list was being built (``"options"`` or
            ``"subcommands"``).
    """

    exit_code = EXIT_HELP_PARSE_ERROR

    def __init__(self, message: str, chain: Sequence[str] = (), section: str = ""):
        super().__init__(message)
        self.chain = tuple(chain)
        self.section = section


class ConfigError(HelpforgeError):
    """Raised for configuration problems (invalid JSON/YAML, unknown keys, missing files)."""

    exit_code = EXIT_GENERIC_FAILURE
