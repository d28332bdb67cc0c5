"""Tests for the output formatting system.

Covers:
- OutputFormat resolution (auto -> rich/plain based on TTY)
- NO_COLOR / TERM=dumb color disabling
- stdout vs stderr discipline, quiet and verbose modes
- print_tree in JSON, plain and rich modes
- Global instance management
"""

from __future__ import annotations

import json

import pytest

from helpforge import output as output_module
from helpforge.models import ArgumentKind, Command, Option
from helpforge.output import (
    OutputFormat,
    OutputManager,
    _should_disable_color,
    get_output,
    reset_output,
    set_output,
)


@pytest.fixture(autouse=True)
def _reset_global_output():
    """Ensure the global output instance is reset between tests."""
    reset_output()
    yield
    reset_output()


@pytest.fixture()
def non_tty(monkeypatch):
    """Patch stdout.isatty() to return False."""
    monkeypatch.setattr("helpforge.output._is_tty", lambda: False)


@pytest.fixture()
def tty(monkeypatch):
    monkeypatch.setattr("helpforge.output._is_tty", lambda: True)
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.delenv("TERM", raising=False)


def _tree() -> Command:
    return Command(
        chain=("docker",),
        options=(Option(description="Enable debug mode", long="debug", short="D"),),
        subcommands=(
            Command(
                chain=("docker", "rm"),
                description="Remove one or more containers",
                arguments=frozenset({ArgumentKind.CONTAINER}),
                options=(Option(description="Force the removal", long="force", short="f"),),
            ),
        ),
    )


class TestFormatResolution:
    def test_auto_on_tty_is_rich(self, tty) -> None:
        assert OutputManager().format == OutputFormat.RICH

    def test_auto_off_tty_is_plain(self, non_tty) -> None:
        assert OutputManager().format == OutputFormat.PLAIN

    def test_auto_with_no_color_is_plain(self, tty) -> None:
        assert OutputManager(no_color=True).format == OutputFormat.PLAIN

    def test_explicit_format_kept(self, non_tty) -> None:
        assert OutputManager(format=OutputFormat.JSON).format == OutputFormat.JSON


class TestColorDisabling:
    def test_no_color_env(self, monkeypatch) -> None:
        monkeypatch.setenv("NO_COLOR", "")
        assert _should_disable_color() is True

    def test_term_dumb(self, monkeypatch) -> None:
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color() is True

    def test_default(self, monkeypatch) -> None:
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm-256color")
        assert _should_disable_color() is False


class TestDiagnostics:
    def test_info_goes_to_stderr(self, capsys, non_tty) -> None:
        OutputManager(no_color=True).info("hello")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "hello" in captured.err

    def test_quiet_suppresses_info_not_errors(self, capsys, non_tty) -> None:
        manager = OutputManager(no_color=True, quiet=True)
        manager.info("info")
        manager.success("done")
        manager.error("broken")
        manager.warning("careful")
        err = capsys.readouterr().err
        assert "info" not in err
        assert "done" not in err
        assert "Error: broken" in err
        assert "Warning: careful" in err

    def test_debug_only_when_verbose(self, capsys, non_tty) -> None:
        OutputManager(no_color=True).debug("hidden")
        OutputManager(no_color=True, verbose=True).debug("shown")
        err = capsys.readouterr().err
        assert "hidden" not in err
        assert "[debug] shown" in err

    def test_progress_only_on_tty(self, capsys, non_tty) -> None:
        OutputManager(no_color=True).progress("Reading docker --help")
        assert capsys.readouterr().err == ""

    def test_suggest_has_arrow(self, capsys, non_tty) -> None:
        OutputManager(no_color=True).suggest("Restart your shell")
        assert "→ Restart your shell" in capsys.readouterr().err


class TestPrintTree:
    def test_json(self, capsys, non_tty) -> None:
        OutputManager(format=OutputFormat.JSON).print_tree(_tree())
        data = json.loads(capsys.readouterr().out)
        assert data["chain"] == ["docker"]
        assert data["subcommands"][0]["arguments"] == ["container"]
        assert "raw_help" not in data

    def test_plain(self, capsys, non_tty) -> None:
        OutputManager(format=OutputFormat.PLAIN).print_tree(_tree())
        assert capsys.readouterr().out.splitlines() == [
            "docker\t",
            "  -D, --debug\tEnable debug mode",
            "  rm\tRemove one or more containers",
            "    <container>",
            "    -f, --force\tForce the removal",
        ]

    def test_rich(self, capsys, tty) -> None:
        OutputManager(format=OutputFormat.RICH, no_color=True).print_tree(_tree())
        out = capsys.readouterr().out
        assert "docker" in out
        assert "rm" in out
        assert "<container>" in out
        assert "--force" in out


class TestGlobalInstance:
    def test_lazy_default(self) -> None:
        assert isinstance(get_output(), OutputManager)

    def test_set_and_reset(self) -> None:
        manager = OutputManager(format=OutputFormat.PLAIN)
        set_output(manager)
        assert get_output() is manager
        reset_output()
        assert output_module._output is None

    def test_convenience_functions_delegate(self, capsys, non_tty) -> None:
        set_output(OutputManager(format=OutputFormat.PLAIN, no_color=True))
        output_module.print_data("data line")
        output_module.error("bad")
        captured = capsys.readouterr()
        assert captured.out == "data line\n"
        assert "Error: bad" in captured.err
