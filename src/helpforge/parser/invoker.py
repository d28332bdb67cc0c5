"""Run the target tool and capture its help output.

:class:`ProcessInvoker` is the only place helpforge touches the outside
world. It blocks until the child process exits; there is no timeout and no
retry. Any failure is reported as :class:`~helpforge.exceptions.InvocationError`.
"""

from __future__ import annotations

import logging
import subprocess
from typing import Protocol, Sequence

from helpforge.exceptions import InvocationError

logger = logging.getLogger(__name__)


class Invoker(Protocol):
    """Anything that can turn an argument vector into captured help text."""

    def run(self, argv: Sequence[str]) -> str:
        ...


class ProcessInvoker:
    """Run ``argv[0]`` with ``argv[1:]`` as a subprocess and return its stdout.

    Args:
        encoding: Codec used to decode the captured output. Undecodable
            bytes are replaced rather than rejected.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self._encoding = encoding

    def run(self, argv: Sequence[str]) -> str:
        """Execute *argv* and return its standard output as text.

        Args:
            argv: Executable followed by its arguments, help flag included.

        Returns:
            The decoded standard output.

        Raises:
            InvocationError: If *argv* is empty, the executable cannot be
                started, or the process exits with a non-zero status.
        """
        if not argv:
            raise InvocationError("Cannot invoke an empty command")

        command = " ".join(argv)
        logger.debug("Invoking %s", command)
        try:
            result = subprocess.run(list(argv), capture_output=True)
        except FileNotFoundError as exc:
            raise InvocationError(
                f"Executable not found: {argv[0]}", argv=argv
            ) from exc
        except OSError as exc:
            raise InvocationError(f"Failed to run '{command}': {exc}", argv=argv) from exc

        if result.returncode != 0:
            stderr = result.stderr.decode(self._encoding, errors="replace").strip()
            detail = stderr.splitlines()[0] if stderr else "no error output"
            raise InvocationError(
                f"'{command}' exited with status {result.returncode}: {detail}",
                argv=argv,
                returncode=result.returncode,
            )

        return result.stdout.decode(self._encoding, errors="replace")
