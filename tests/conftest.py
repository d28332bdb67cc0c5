"""Shared test fixtures for helpforge.

Provides a canned-output invoker standing in for the real target tool,
isolated config environments, and output state management. These fixtures
are automatically discovered by pytest and available to all test modules
without explicit imports.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import pytest

from helpforge.exceptions import InvocationError
from helpforge.output import OutputFormat, OutputManager, reset_output, set_output
from helpforge.tools import docker_profile


FIXTURES_DIR = Path(__file__).parent / "fixtures"


class CannedInvoker:
    """Invoker returning pre-recorded help pages keyed by chain.

    ``argv`` must end with ``help_flag``; the chain before it selects the
    page. Unknown chains fail like a missing subcommand would.
    """

    def __init__(self, pages: dict[tuple[str, ...], str], help_flag: str = "--help") -> None:
        self.pages = pages
        self.help_flag = help_flag
        self.calls: list[tuple[str, ...]] = []

    def run(self, argv: Sequence[str]) -> str:
        argv = tuple(argv)
        self.calls.append(argv)
        assert argv[-1] == self.help_flag, f"help flag missing from {argv}"
        chain = argv[:-1]
        if chain not in self.pages:
            raise InvocationError(
                f"'{' '.join(argv)}' exited with status 1: unknown command",
                argv=argv,
                returncode=1,
            )
        return self.pages[chain]


def load_pages(directory: Path) -> dict[tuple[str, ...], str]:
    """Load ``<chain joined by _>.txt`` files into a chain-keyed mapping."""
    return {
        tuple(path.stem.split("_")): path.read_text(encoding="utf-8")
        for path in sorted(directory.glob("*.txt"))
    }


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time.  When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale.
    Resetting forces a fresh manager to be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Help-page fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def docker_pages() -> dict[tuple[str, ...], str]:
    """Help pages of a trimmed-down docker: network (connect, create) and rm."""
    return load_pages(FIXTURES_DIR / "docker")


@pytest.fixture
def docker_invoker(docker_pages: dict[tuple[str, ...], str]) -> CannedInvoker:
    return CannedInvoker(docker_pages)


@pytest.fixture
def make_invoker():
    """Factory for a :class:`CannedInvoker` over inline pages."""
    return CannedInvoker


@pytest.fixture
def docker_config():
    """Parser configuration of the built-in docker profile."""
    return docker_profile().parser


@pytest.fixture
def patched_invoker(monkeypatch: pytest.MonkeyPatch, docker_invoker: CannedInvoker) -> CannedInvoker:
    """Make every CommandForge built without an explicit invoker use the docker pages."""
    monkeypatch.setattr("helpforge.generator.forge.ProcessInvoker", lambda: docker_invoker)
    return docker_invoker


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Sets XDG_CONFIG_HOME and XDG_DATA_HOME to subdirectories of tmp_path so
    that tests never touch real user config, forces the XDG code path,
    clears HELPFORGE_* environment variables, and changes the working
    directory to tmp_path.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setattr("helpforge.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.delenv("HELPFORGE_PROFILE", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a PLAIN-format, quiet OutputManager for the duration of a test."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
