# src/sitesmith_shell/core/handlers/core/quit_handler.py
from sitesmith_shell.core.context.shell_context import ShellContext


def handle_quit(_args, ctx: ShellContext, _stdin=None) -> int:
    """Signals the shell to stop, warning about unsaved edits."""
    if ctx.dirty and ctx.project:
        print("⚠️  The loaded site has unsaved edits; use 'site save <dir>' to keep them.")
    return 130  # Special exit code for 'quit'
