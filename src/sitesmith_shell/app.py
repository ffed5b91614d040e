from __future__ import annotations

import argparse
import logging
import sys

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer
from prompt_toolkit.document import Document
from prompt_toolkit.history import FileHistory

from sitesmith_shell.core.command_registry import COMMAND_HIERARCHY, register_all_commands
from sitesmith_shell.core.context.shell_context import ShellContext
from sitesmith_shell.core.core import QUIT_CODE, execute_line
from sitesmith_shell.core.managers.completion_manager import CompletionManager
from sitesmith_shell.core.managers.config_manager import config_manager
from sitesmith_shell.core.utils.configure_logging import configure_logger
from sitesmith_shell.core.utils.path_utils import PathUtils

# Initialize logging based on configuration
DEBUG_LEVEL = config_manager.get_nested("debug.level", "WARNING")
configure_logger(DEBUG_LEVEL, config_manager.get_nested("debug.modules", {}))
logger = logging.getLogger(__name__)


class PromptToolkitCompleter(Completer):
    """
    A wrapper that uses the CompletionManager to generate suggestions
    in a way that prompt_toolkit expects.
    """

    def __init__(self, manager: CompletionManager):
        self.manager = manager

    def get_completions(self, document: Document, complete_event):
        yield from self.manager.generate_completions(document)


# --- Shell Application ---


def start_shell(site_path: str | None = None) -> None:
    """Starts the interactive REPL for the SiteSmith shell."""
    register_all_commands()
    ctx = ShellContext()

    print("Welcome to SiteSmith Shell 1.0 (type 'help' for commands)")

    if site_path:
        execute_line(f'site load "{site_path}"', ctx)

    history_path = PathUtils.get_shell_history_file()
    history = FileHistory(str(history_path))

    completion_manager = CompletionManager(ctx, history, COMMAND_HIERARCHY)
    session = PromptSession(
        history=history,
        completer=PromptToolkitCompleter(completion_manager),
        complete_while_typing=True
    )

    ctx.prompt_session = session
    logger.info("Shell startup; history file at: %s", history_path)

    try:
        while True:
            try:
                prompt_text = config_manager.get_nested("shell.prompt", "SiteSmith>> ")
                line = session.prompt(prompt_text).strip()
            except (EOFError, KeyboardInterrupt):
                break

            if not line:
                continue

            if execute_line(line, ctx) == QUIT_CODE:
                break
    finally:
        print("Bye!")


def main(argv: list[str] | None = None) -> int:
    """Entrypoint for running the shell from the command line."""
    parser = argparse.ArgumentParser(prog="sitesmith", description="Chat-driven editor for generated websites.")
    parser.add_argument("site", nargs="?", help="Project directory or HTML file to load at start-up.")
    args = parser.parse_args(argv)
    start_shell(args.site)
    return 0


if __name__ == "__main__":
    sys.exit(main())
