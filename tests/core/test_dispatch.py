# tests/core/test_dispatch.py
import pytest

from sitesmith_shell.core.command_registry import (
    COMMAND_HELP_TEXTS,
    COMMAND_HIERARCHY,
    CommandRegistry,
    register_all_commands,
)
from sitesmith_shell.core.context.shell_context import ShellContext
from sitesmith_shell.core.core import QUIT_CODE, execute_line
from sitesmith_shell.core.utils.helptext import get_help_text


@pytest.fixture
def ctx():
    return ShellContext()


def test_discovery_registers_all_commands():
    """Alle *_handler.py modules worden gevonden, ook in submappen."""
    register_all_commands()
    for name in ("site", "catalog", "tokens", "edit", "prompt", "preview",
                 "changelog", "config", "help", "quit", "cls"):
        assert name in CommandRegistry, name
    assert set(COMMAND_HIERARCHY["site"]) == {"load", "save", "status", "show"}
    assert set(COMMAND_HIERARCHY["config"]) == {"list", "set", "reset"}
    assert COMMAND_HIERARCHY["catalog"] is None
    assert "site" in COMMAND_HELP_TEXTS


def test_help_text_contains_handler_sections():
    register_all_commands()
    text = get_help_text()
    assert "SiteSmith Shell - Help" in text
    assert "SITE MANAGEMENT:" in text
    assert "EDITING:" in text


def test_execute_known_command(ctx):
    calls = []

    def handle_echo(args, _ctx, _stdin=None):
        calls.append(args)
        return 0

    assert execute_line("echo a b", ctx, {"echo": handle_echo}) == 0
    assert calls == [["a", "b"]]


def test_unknown_command_is_an_edit_request(ctx):
    """Een regel zonder bekend commando gaat in zijn geheel naar 'edit'."""
    received = []

    def handle_edit(args, _ctx, _stdin=None):
        received.append(args)
        return 0

    execute_line("make the subscribe button bigger", ctx, {"edit": handle_edit})
    assert received == [["make the subscribe button bigger"]]


def test_unknown_command_without_edit_handler(ctx, capsys):
    assert execute_line("frobnicate", ctx, {}) == 127
    assert "command not found: frobnicate" in capsys.readouterr().out


def test_handler_exception_is_reported(ctx, capsys):
    def handle_boom(_args, _ctx):
        raise RuntimeError("kaboom")

    assert execute_line("boom", ctx, {"boom": handle_boom}) == 1
    assert "❌ Error: kaboom" in capsys.readouterr().out


def test_blank_line_does_nothing(ctx):
    assert execute_line("   ", ctx, {}) == 0


def test_quit_returns_quit_code(ctx):
    register_all_commands()
    assert execute_line("quit", ctx) == QUIT_CODE
